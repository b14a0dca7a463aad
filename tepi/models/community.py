"""Community model."""
from sqlalchemy import Column, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from tepi.db.session import Base, new_id, utcnow


class Community(Base):
    __tablename__ = "communities"

    id = Column(String(64), primary_key=True, default=new_id)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    created_by = Column(String(64), ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime, default=utcnow)

    posts = relationship("Post", back_populates="community")
