"""Image specification models."""

from pydantic import BaseModel, Field

BASE_IMAGE_TYPE = "base"


class TemplateParams(BaseModel):
    """Named parameters available to Dockerfile templates."""
    mongo_version: str = Field(..., min_length=1, description="MongoDB version")

    class Config:
        """Pydantic config."""
        extra = "forbid"


class ImageSpec(BaseModel):
    """A versioned image variant."""
    version: str = Field(..., min_length=1, description="MongoDB version")
    type: str = Field(..., min_length=1, description="Image type, e.g. base or standalone")

    class Config:
        """Pydantic config."""
        frozen = True

    @property
    def reference(self) -> str:
        """Image reference used as the repository tag."""
        return f"{self.version}-{self.type}"

    @property
    def template_name(self) -> str:
        """Name of the Dockerfile template for this type."""
        return f"Dockerfile-{self.type}"

    @property
    def is_base(self) -> bool:
        return self.type == BASE_IMAGE_TYPE

    def base(self) -> "ImageSpec":
        """Spec of the base image this variant is built from."""
        return ImageSpec(version=self.version, type=BASE_IMAGE_TYPE)

    def params(self) -> TemplateParams:
        return TemplateParams(mongo_version=self.version)
