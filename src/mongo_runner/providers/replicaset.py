"""Replica set topology launcher."""

import logging
from typing import List, Optional

from docker.models.containers import Container

from mongo_runner.errors import InitiationError
from mongo_runner.models.topology import LaunchProgress, LaunchState, Topology
from mongo_runner.providers.base import BaseLauncher, DEFAULT_PORT, port_binding
from mongo_runner.utils.docker import store_file
from mongo_runner.utils.templates import read_template, render_template


logger = logging.getLogger(__name__)

NETWORK_NAME = "mongo-rs"
REPLICA_SET_ID = "rs0"
REPLICA_SET_SIZE = 3
INIT_SCRIPT_TEMPLATE = "replicaSet.js"
INIT_SCRIPT_PATH = "/replicaSet.js"


def member_name(index: int) -> str:
    return f"mongo-{index}"


def member_hosts() -> List[str]:
    """Host strings of all members as seen from inside the network."""
    return [f"{member_name(i)}:{DEFAULT_PORT}" for i in range(REPLICA_SET_SIZE)]


class ReplicaSetLauncher(BaseLauncher):
    """Runs three networked mongod containers and initiates ``rs0``."""

    topology = Topology.REPLICASET
    members = REPLICA_SET_SIZE

    def _launch(self, version: str, progress: LaunchProgress) -> None:
        logger.info(f"Starting mongo version {version} in replica set mode")

        # Created on every launch; a leftover network with this name makes
        # the engine reject the call.
        network = self.client.networks.create(NETWORK_NAME)
        progress.network = network.name

        image = self.images.ensure_image(version, self.topology.value)
        progress.image = image
        progress.advance(LaunchState.IMAGE_RESOLVED)

        primary: Optional[Container] = None
        for index in range(REPLICA_SET_SIZE):
            name = member_name(index)
            logger.info(f"Starting member {name} on port {DEFAULT_PORT + index}")
            container = self.client.containers.create(
                image,
                name=name,
                ports=port_binding(DEFAULT_PORT + index),
            )
            container.start()
            progress.add_member(name)
            if len(progress.members) == REPLICA_SET_SIZE:
                progress.advance(LaunchState.CONTAINERS_RUNNING)

            network.connect(container.id)
            progress.connect_member(name)
            if primary is None:
                primary = container

        progress.advance(LaunchState.NETWORKED)

        self.initiate(primary, progress)
        progress.advance(LaunchState.INITIATED)

    def render_init_script(self) -> str:
        """Render the ``rs.initiate`` script for the fixed member set."""
        template = read_template(self.images.templates_dir, INIT_SCRIPT_TEMPLATE)
        return render_template(
            template,
            replica_set_id=REPLICA_SET_ID,
            members=member_hosts(),
        )

    def initiate(self, primary: Container, progress: LaunchProgress) -> None:
        """Upload and run the initiation script on ``primary``."""
        store_file(primary, INIT_SCRIPT_PATH, self.render_init_script())

        logger.info(f"Initiating replica set {REPLICA_SET_ID} on {primary.name}")
        result = primary.exec_run(
            [self.config.shell, f"localhost:{DEFAULT_PORT}/test", INIT_SCRIPT_PATH]
        )
        output = result.output.decode(errors="replace") if result.output else ""
        logger.debug(output)

        if result.exit_code != 0:
            logger.error(f"Replica set initiation exited with {result.exit_code}")
            raise InitiationError(
                f"Replica set initiation failed with exit code {result.exit_code}",
                exit_code=result.exit_code,
                output=output,
                progress=progress,
            )
