"""Marketplace listing model."""
from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, Text

from tepi.db.session import Base, new_id, utcnow


class MarketplaceItem(Base):
    __tablename__ = "marketplace_items"

    id = Column(String(64), primary_key=True, default=new_id)
    seller_id = Column(String(64), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False, default="")
    price = Column(Integer, nullable=False, default=0)  # KRW, whole won
    category = Column(String(30), nullable=False, default="other")
    images = Column(JSON, nullable=True)
    location = Column(String(200), nullable=True)
    status = Column(String(20), nullable=False, default="available")
    created_at = Column(DateTime, default=utcnow, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
