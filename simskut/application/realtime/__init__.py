"""Realtime feed delivery."""

from .feed_buffer import ContainerFeedSource, FeedBuffer, FeedSource

__all__ = ["ContainerFeedSource", "FeedBuffer", "FeedSource"]
