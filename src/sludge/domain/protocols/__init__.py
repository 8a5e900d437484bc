"""Domain protocols."""

from .protocols import AudioStorage, HubNotifier, MetadataStore

__all__ = ["AudioStorage", "HubNotifier", "MetadataStore"]
