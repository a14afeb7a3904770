"""
Mongo Runner - disposable MongoDB deployments in Docker.

Builds versioned MongoDB images from Dockerfile templates and launches
either a standalone node or a three-node replica set for local testing.
"""

__version__ = "1.0.0"
__author__ = "Mongo Runner Development Team"

# Re-export key components for easier access
from mongo_runner.models.config import RunnerConfig
from mongo_runner.models.image import ImageSpec, TemplateParams
from mongo_runner.models.topology import Topology, LaunchState, LaunchProgress

__all__ = [
    "RunnerConfig",
    "ImageSpec",
    "TemplateParams",
    "Topology",
    "LaunchState",
    "LaunchProgress",
]
