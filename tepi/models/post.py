"""Post model."""
from sqlalchemy import JSON, Column, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from tepi.db.session import Base, new_id, utcnow


class Post(Base):
    __tablename__ = "posts"

    id = Column(String(64), primary_key=True, default=new_id)
    user_id = Column(String(64), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    images = Column(JSON, nullable=True)  # Array of image URLs
    files = Column(JSON, nullable=True)  # Array of {name, url, size}
    visibility = Column(String(20), nullable=False, default="public")  # public | anonymous
    community_id = Column(String(64), ForeignKey("communities.id", ondelete="CASCADE"), nullable=True, index=True)
    created_at = Column(DateTime, default=utcnow, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    user = relationship("Profile", back_populates="posts")
    community = relationship("Community", back_populates="posts")
    comments = relationship("Comment", back_populates="post", cascade="all, delete-orphan")
    likes = relationship("Like", back_populates="post", cascade="all, delete-orphan")
