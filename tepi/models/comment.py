"""Comment model."""
from sqlalchemy import Column, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from tepi.db.session import Base, new_id, utcnow


class Comment(Base):
    __tablename__ = "comments"

    id = Column(String(64), primary_key=True, default=new_id)
    post_id = Column(String(64), ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(64), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime, default=utcnow)

    user = relationship("Profile", back_populates="comments")
    post = relationship("Post", back_populates="comments")
