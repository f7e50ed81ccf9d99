"""Image and derived-image records."""

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr


class Image(BaseModel):
    """A stored original image. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    image_id: StrictStr = Field(..., description="Unique image identifier")
    owner_id: StrictStr = Field(..., description="Owner user identifier")
    storage_key: StrictStr = Field(..., description="Object key where the image is stored")
    original_name: StrictStr = Field(..., description="Original image file name")
    content_type: StrictStr = Field(..., description="MIME type of the image (e.g. image/jpeg)")
    file_size: StrictInt = Field(..., gt=0, description="Image size in bytes")
    created_at: StrictStr = Field(..., description="ISO-8601 creation timestamp (UTC)")


class TransformedImage(BaseModel):
    """A derived artifact produced by one transformation of exactly one parent image."""

    model_config = ConfigDict(frozen=True)

    transformed_image_id: StrictStr = Field(..., description="Unique derived image identifier")
    parent_image_id: StrictStr = Field(..., description="Identifier of the original image")
    owner_id: StrictStr = Field(..., description="Owner user identifier, equal to the parent's")
    storage_key: StrictStr = Field(..., description="Object key of the derived image")
    filename: StrictStr = Field(..., description="Generated file name of the derived image")
    url: StrictStr = Field(..., description="Object URL returned when the image was stored")
    content_type: StrictStr = Field(..., description="MIME type of the derived image")
    file_size: StrictInt = Field(..., gt=0, description="Derived image size in bytes")
    applied_options: StrictStr = Field(..., description="Serialized transformation request")
    created_at: StrictStr = Field(..., description="ISO-8601 creation timestamp (UTC)")
