"""Pydantic models for configuration and validation."""

from mongo_runner.models.config import RunnerConfig
from mongo_runner.models.image import ImageSpec, TemplateParams, BASE_IMAGE_TYPE
from mongo_runner.models.topology import Topology, LaunchState, LaunchProgress

__all__ = [
    "RunnerConfig",
    "ImageSpec",
    "TemplateParams",
    "BASE_IMAGE_TYPE",
    "Topology",
    "LaunchState",
    "LaunchProgress",
]
