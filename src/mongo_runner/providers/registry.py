"""Launcher registry keyed by topology."""

import logging
from typing import Dict, Optional, Type

import docker

from mongo_runner.models.config import RunnerConfig
from mongo_runner.models.topology import Topology
from mongo_runner.providers.base import BaseLauncher
from mongo_runner.providers.image import ImageProvider
from mongo_runner.providers.replicaset import ReplicaSetLauncher
from mongo_runner.providers.standalone import StandaloneLauncher


logger = logging.getLogger(__name__)

LAUNCHERS: Dict[Topology, Type[BaseLauncher]] = {
    Topology.STANDALONE: StandaloneLauncher,
    Topology.REPLICASET: ReplicaSetLauncher,
}


def get_launcher(
    topology: Topology,
    client: docker.DockerClient,
    config: RunnerConfig,
    images: Optional[ImageProvider] = None,
) -> BaseLauncher:
    """Instantiate the launcher for ``topology``."""
    try:
        launcher_class = LAUNCHERS[topology]
    except KeyError:
        raise ValueError(f"No launcher registered for topology {topology!r}") from None

    if images is None:
        images = ImageProvider(client, templates_dir=config.templates_dir)

    logger.debug(f"Using {launcher_class.__name__} for {topology.value}")
    return launcher_class(client, images, config)


def list_topologies() -> list[str]:
    """List topology names with a registered launcher."""
    return [topology.value for topology in LAUNCHERS]
