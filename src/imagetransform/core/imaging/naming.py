"""Naming policy for derived images."""

import posixpath
import uuid

from imagetransform.core.models.transformation import TransformationOptions
from imagetransform.core.utils.constants import TRANSFORMED_KEY_PREFIX
from imagetransform.core.utils.mime import OutputFormat, lookup_requested_format


def describe_operations(options: TransformationOptions) -> str:
    """Build the ordered suffix describing the applied operations.

    Example:
        _transformed_resizew50h50_crop_rot90_gray
    """
    suffix = "_transformed"

    if options.resize is not None:
        suffix += "_resize"
        if options.resize.width is not None:
            suffix += f"w{options.resize.width}"
        if options.resize.height is not None:
            suffix += f"h{options.resize.height}"

    if options.crop is not None:
        suffix += "_crop"

    if options.rotation:
        suffix += f"_rot{options.rotation}"

    if options.grayscale:
        suffix += "_gray"
    if options.sepia:
        suffix += "_sepia"

    return suffix


def build_transformed_filename(
    original_name: str,
    options: TransformationOptions,
    output_format: OutputFormat,
    *,
    source_content_type: str | None = None,
) -> str:
    """Return a globally unique file name for a derived image.

    The extension follows the output format whenever a format was requested
    or the output type differs from the source; otherwise the original
    extension is kept.
    """
    name = posixpath.basename(original_name.replace("\\", "/")) or "image"
    base, extension = posixpath.splitext(name)
    base = base or "image"

    format_changed = (
        lookup_requested_format(options.requested_format) is not None
        or output_format.content_type != source_content_type
    )
    if format_changed or not extension:
        extension = output_format.extension

    return f"{uuid.uuid4()}_{base}{describe_operations(options)}{extension}"


def build_transformed_key(owner_id: str, filename: str) -> str:
    """Return the storage key for a derived image file."""
    return f"{TRANSFORMED_KEY_PREFIX}/{owner_id}/{filename}"
