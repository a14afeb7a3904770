"""Docker engine helpers."""

import io
import logging
import tarfile
import time
from pathlib import PurePosixPath
from typing import Optional

import docker
from docker.models.containers import Container


logger = logging.getLogger(__name__)


def get_client(base_url: Optional[str] = None) -> docker.DockerClient:
    """Connect to the Docker engine, from the environment unless a URL is given."""
    if base_url:
        return docker.DockerClient(base_url=base_url)
    return docker.from_env()


def store_file(container: Container, path: str, content: str, mode: int = 0o644) -> None:
    """Write ``content`` to ``path`` inside ``container``."""
    target = PurePosixPath(path)
    data = content.encode()

    info = tarfile.TarInfo(name=target.name)
    info.size = len(data)
    info.mode = mode
    info.mtime = int(time.time())

    stream = io.BytesIO()
    with tarfile.open(fileobj=stream, mode="w") as tar:
        tar.addfile(info, io.BytesIO(data))

    logger.debug(f"Writing {path} into container {container.name}")
    container.put_archive(str(target.parent), stream.getvalue())
