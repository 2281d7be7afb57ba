from sqlalchemy import Column, String, Text, DateTime
from .database import Base
from datetime import datetime


class StorageItem(Base):
    """One key of durable local storage. Values are opaque serialized strings."""
    __tablename__ = "local_storage"
    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
