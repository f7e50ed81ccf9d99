"""Transformation request value objects.

Only the serialized form of these models is ever persisted (as the
`applied_options` of a derived image). Geometry that can be checked without
looking at the source image is validated here; bounds against the source
dimensions are checked by the engine.
"""

from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    StrictStr,
    model_validator,
)
from pydantic import ValidationError as PydanticValidationError

from imagetransform.core.models.errors import InvalidOptionsError
from imagetransform.core.utils.constants import MAX_DIMENSION
from imagetransform.core.utils.validators import sanitize_validation_errors


class ResizeOptions(BaseModel):
    """Target dimensions; one missing dimension is derived from the aspect ratio."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    width: StrictInt | None = Field(
        None, gt=0, le=MAX_DIMENSION, description="Target width in pixels"
    )
    height: StrictInt | None = Field(
        None, gt=0, le=MAX_DIMENSION, description="Target height in pixels"
    )

    @model_validator(mode="after")
    def require_a_dimension(self) -> "ResizeOptions":
        if self.width is None and self.height is None:
            raise ValueError("Resize requires a width or a height")
        return self


class CropOptions(BaseModel):
    """Sub-rectangle of the source image, in source pixel coordinates."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    x: StrictInt = Field(..., ge=0, lt=MAX_DIMENSION, description="Left edge of the crop region")
    y: StrictInt = Field(..., ge=0, lt=MAX_DIMENSION, description="Top edge of the crop region")
    width: StrictInt = Field(..., gt=0, le=MAX_DIMENSION, description="Width of the crop region")
    height: StrictInt = Field(..., gt=0, le=MAX_DIMENSION, description="Height of the crop region")


class FilterOptions(BaseModel):
    """Colour filters. Grayscale is always applied before sepia."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    grayscale: StrictBool = False
    sepia: StrictBool = False


class TransformationOptions(BaseModel):
    """One transformation request; every operation is independently optional."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    resize: ResizeOptions | None = None
    crop: CropOptions | None = None
    rotate: StrictInt | None = Field(None, description="Clockwise rotation in degrees")
    format: StrictStr | None = Field(None, description="Requested output format")
    filters: FilterOptions | None = None

    @property
    def rotation(self) -> int:
        """Rotation in degrees, 0 when absent."""
        return self.rotate or 0

    @property
    def requested_format(self) -> str | None:
        """Lower-cased requested format, or None when absent or blank."""
        if self.format is None or not self.format.strip():
            return None
        return self.format.strip().lower()

    @property
    def grayscale(self) -> bool:
        return self.filters is not None and self.filters.grayscale

    @property
    def sepia(self) -> bool:
        return self.filters is not None and self.filters.sepia

    def to_json(self) -> str:
        """Serialize for audit/display, omitting operations that were not requested."""
        return self.model_dump_json(exclude_none=True)

    @classmethod
    def parse(cls, raw: "TransformationOptions | dict[str, Any] | None") -> "TransformationOptions":
        """Validate raw options once at the service boundary.

        Raises:
            InvalidOptionsError: If the options are malformed
        """
        if isinstance(raw, cls):
            return raw

        try:
            return cls.model_validate(raw or {})
        except PydanticValidationError as exc:
            raise InvalidOptionsError(
                message="Invalid transformation options",
                details={"errors": sanitize_validation_errors(exc.errors())},
            ) from exc
