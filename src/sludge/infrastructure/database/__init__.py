"""Database connection and table models."""

from .database import Base, Database
from .models import HubModel, SegmentModel, StreamModel

__all__ = ["Base", "Database", "HubModel", "SegmentModel", "StreamModel"]
