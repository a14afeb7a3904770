"""Image and topology providers for mongo-runner."""

from mongo_runner.providers.base import BaseLauncher, ProviderStatus
from mongo_runner.providers.image import ImageProvider
from mongo_runner.providers.registry import get_launcher, list_topologies

__all__ = [
    "BaseLauncher",
    "ProviderStatus",
    "ImageProvider",
    "get_launcher",
    "list_topologies",
]
