"""
Base model class with common fields and functionality
"""

from sqlalchemy import Column, DateTime, Integer, func
from sqlalchemy.orm import declarative_base
from datetime import datetime
from typing import Any

# Create the base class
Base = declarative_base()


class BaseModel(Base):
    """
    Base model class that provides common fields and functionality
    for all database models
    """
    __abstract__ = True

    # Primary key
    id = Column(
        Integer,
        primary_key=True,
        autoincrement=True,
        index=True
    )

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        index=True
    )

    def to_dict(self) -> dict[str, Any]:
        """
        Convert model instance to dictionary
        """
        result = {}
        for column in self.__table__.columns:
            value = getattr(self, column.name)
            if isinstance(value, datetime):
                value = value.isoformat()
            result[column.name] = value
        return result

    def update_from_dict(self, data: dict[str, Any]) -> None:
        """
        Update model instance from dictionary
        """
        for key, value in data.items():
            if hasattr(self, key):
                setattr(self, key, value)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.id})>"
