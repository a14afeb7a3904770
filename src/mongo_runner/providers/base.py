"""Base launcher interface."""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING

import docker
from docker.errors import DockerException

from mongo_runner.errors import LaunchError, RunnerError
from mongo_runner.models.config import RunnerConfig
from mongo_runner.models.topology import LaunchProgress, Topology

if TYPE_CHECKING:
    from mongo_runner.providers.image import ImageProvider


logger = logging.getLogger(__name__)

DEFAULT_PORT = 27017


class ProviderStatus(Enum):
    """Provider resource status."""
    PRESENT = "present"
    ABSENT = "absent"


def port_binding(host_port: int) -> dict:
    """Map the Mongo container port to ``host_port`` on the host."""
    return {f"{DEFAULT_PORT}/tcp": host_port}


class BaseLauncher(ABC):
    """Base interface that all topology launchers implement."""

    topology: Topology
    members: int = 1

    def __init__(
        self,
        client: docker.DockerClient,
        images: "ImageProvider",
        config: RunnerConfig,
    ):
        self.client = client
        self.images = images
        self.config = config

    def launch(self, version: str) -> LaunchProgress:
        """Launch the topology for ``version``.

        Failures are re-raised as :class:`LaunchError` carrying the progress
        made so far. Nothing created before the failure is removed.
        """
        progress = LaunchProgress(
            topology=self.topology,
            version=version,
            expected_members=self.members,
        )
        try:
            self._launch(version, progress)
        except LaunchError as e:
            if e.progress is None:
                e.progress = progress
            raise
        except (RunnerError, DockerException) as e:
            logger.error(f"{self.topology.value} launch failed: {progress.describe()}")
            raise LaunchError(
                f"{self.topology.value} launch failed at {progress.describe()}: {e}",
                progress,
            ) from e
        return progress

    @abstractmethod
    def _launch(self, version: str, progress: LaunchProgress) -> None:
        """Run the launch steps, updating ``progress`` as they complete."""
        pass
