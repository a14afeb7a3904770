"""Image provider for building and resolving MongoDB images."""

import io
import logging
from pathlib import Path
from typing import Optional, Union

import docker
from docker.errors import ImageNotFound
from docker.models.images import Image

from mongo_runner.models.image import ImageSpec, TemplateParams
from mongo_runner.providers.base import ProviderStatus
from mongo_runner.utils.templates import default_templates_dir, read_template, render_template


logger = logging.getLogger(__name__)


class ImageProvider:
    """Builds versioned images from Dockerfile templates."""

    def __init__(
        self,
        client: docker.DockerClient,
        templates_dir: Optional[Union[str, Path]] = None,
    ):
        """Initialize image provider."""
        self.client = client
        self.templates_dir = Path(templates_dir) if templates_dir else default_templates_dir()

    def status(self, spec: ImageSpec) -> ProviderStatus:
        """Check if the image exists in the engine's image store."""
        try:
            self.client.images.get(spec.reference)
        except ImageNotFound:
            return ProviderStatus.ABSENT
        return ProviderStatus.PRESENT

    def exists(self, spec: ImageSpec) -> bool:
        return self.status(spec) == ProviderStatus.PRESENT

    def render_dockerfile(self, spec: ImageSpec, params: TemplateParams) -> str:
        """Render the Dockerfile template for ``spec``."""
        template = read_template(self.templates_dir, spec.template_name)
        return render_template(template, **params.model_dump())

    def build_image(self, spec: ImageSpec, params: Optional[TemplateParams] = None) -> Image:
        """Build and tag the image described by ``spec``."""
        params = params or spec.params()
        logger.info(f"Building image {spec.reference}")

        dockerfile = self.render_dockerfile(spec, params)
        image, build_log = self.client.images.build(
            fileobj=io.BytesIO(dockerfile.encode()),
            rm=True,
        )
        for chunk in build_log:
            if "stream" in chunk:
                logger.debug(chunk["stream"].rstrip())

        image.tag(spec.reference)
        logger.info(f"Image {spec.reference} built")
        return image

    def ensure_image(self, version: str, image_type: str) -> str:
        """Make sure ``{version}-{image_type}`` exists, building it if needed.

        Non-base images are built on top of ``{version}-base``, which is
        built first when missing.
        """
        spec = ImageSpec(version=version, type=image_type)

        if self.exists(spec):
            logger.info(f"Image {spec.reference} exists")
            return spec.reference

        params = spec.params()
        if not spec.is_base and not self.exists(spec.base()):
            self.build_image(spec.base(), params)
        self.build_image(spec, params)

        return spec.reference
