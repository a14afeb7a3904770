"""Standalone topology launcher."""

import logging

from mongo_runner.models.topology import LaunchProgress, LaunchState, Topology
from mongo_runner.providers.base import BaseLauncher, DEFAULT_PORT, port_binding


logger = logging.getLogger(__name__)


class StandaloneLauncher(BaseLauncher):
    """Runs a single mongod container on the default port."""

    topology = Topology.STANDALONE
    members = 1

    def _launch(self, version: str, progress: LaunchProgress) -> None:
        logger.info(f"Starting mongo version {version} in standalone mode")

        image = self.images.ensure_image(version, self.topology.value)
        progress.image = image
        progress.advance(LaunchState.IMAGE_RESOLVED)

        # No readiness check, returns once the engine accepts the start
        logger.info(f"Starting docker image {image}")
        container = self.client.containers.create(image, ports=port_binding(DEFAULT_PORT))
        container.start()
        progress.add_member(container.name or container.id)
        progress.advance(LaunchState.CONTAINERS_RUNNING)
