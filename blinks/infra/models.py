"""
Database models for the Blink Actions server.
SQLAlchemy models with async SQLite support.
"""
import uuid
from typing import Dict, Any

from sqlalchemy import Column, String, DateTime, Text, Index
from sqlalchemy.orm import declarative_base
from sqlalchemy.dialects.sqlite import JSON
from sqlalchemy.sql import func

Base = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


class BlinkRecord(Base):
    """Database model for stored blinks."""
    __tablename__ = "blinks"

    # Primary key and creation time, assigned once
    id = Column(String(36), primary_key=True, default=_new_id)
    created_at = Column(DateTime(timezone=True), nullable=False, default=func.now())

    # Display fields
    title = Column(String(255), nullable=False)
    icon_url = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    label = Column(String(255), nullable=False)

    # Default recipient, validated only when a transaction is built
    wallet_address = Column(String(64), nullable=False)

    # Blink kind and its open config document
    type = Column(String(20), nullable=False)
    config = Column(JSON, nullable=False, default=dict)

    __table_args__ = (
        Index('idx_blinks_created', 'created_at'),
    )

    def to_dict(self) -> Dict[str, Any]:
        """Convert record to dictionary."""
        return {
            'id': self.id,
            'created_at': self.created_at,
            'title': self.title,
            'icon_url': self.icon_url,
            'description': self.description,
            'label': self.label,
            'wallet_address': self.wallet_address,
            'type': self.type,
            'config': self.config if self.config is not None else {},
        }
