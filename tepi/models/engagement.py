"""Engagement models: Like."""
from sqlalchemy import Column, DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import relationship

from tepi.db.session import Base, new_id, utcnow


class Like(Base):
    """A user's like on a post. Presence is the fact; there is no count column."""
    __tablename__ = "likes"
    __table_args__ = (UniqueConstraint("post_id", "user_id", name="uq_likes_post_user"),)

    id = Column(String(64), primary_key=True, default=new_id)
    post_id = Column(String(64), ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(64), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime, default=utcnow)

    user = relationship("Profile", back_populates="likes")
    post = relationship("Post", back_populates="likes")
