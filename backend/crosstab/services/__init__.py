"""
Business logic services.
"""

from crosstab.services.channel_service import ChannelRegistry, ChannelService, get_registry

__all__ = [
    "ChannelRegistry",
    "ChannelService",
    "get_registry",
]
