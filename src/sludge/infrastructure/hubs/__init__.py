"""Outbound hub delivery."""

from .notifier import SEGMENT_CREATED, STREAM_CONNECTED, HttpHubNotifier

__all__ = ["HttpHubNotifier", "SEGMENT_CREATED", "STREAM_CONNECTED"]
