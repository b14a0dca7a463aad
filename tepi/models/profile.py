"""Profile model."""
from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.orm import relationship

from tepi.db.session import Base, new_id, utcnow


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(String(64), primary_key=True, default=new_id)
    username = Column(String(50), unique=True, nullable=True, index=True)
    display_name = Column(String(100), nullable=True)
    full_name = Column(String(200), nullable=True)
    email = Column(String(255), nullable=True)
    avatar_url = Column(Text, nullable=True)
    bio = Column(Text, nullable=True)
    website = Column(Text, nullable=True)
    location = Column(String(200), nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    posts = relationship("Post", back_populates="user", cascade="all, delete-orphan")
    comments = relationship("Comment", back_populates="user", cascade="all, delete-orphan")
    likes = relationship("Like", back_populates="user", cascade="all, delete-orphan")
