"""MIME type detection and output format resolution."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from aws_lambda_powertools import Logger

from imagetransform.core.utils.constants import JPEG_QUALITY, WEBP_QUALITY

logger = Logger(utc=True)

MAGIC_BYTES: Mapping[bytes, str] = {
    b"\xff\xd8\xff": "image/jpeg",
    b"\x89PNG\r\n\x1a\n": "image/png",
    b"GIF87a": "image/gif",
    b"GIF89a": "image/gif",
    b"RIFF": "image/webp",
}


def detect_mime_type(file_data: bytes) -> str:
    for signature, mime in MAGIC_BYTES.items():
        if file_data.startswith(signature):
            return mime

    raise ValueError("Unsupported or unknown file type")


@dataclass(frozen=True)
class OutputFormat:
    """An encodable image format: Pillow writer name, MIME type and file extension."""

    pillow_format: str
    content_type: str
    extension: str
    save_options: Mapping[str, Any] = field(default_factory=dict)
    supports_alpha: bool = True


JPEG = OutputFormat("JPEG", "image/jpeg", ".jpg", {"quality": JPEG_QUALITY}, supports_alpha=False)
PNG = OutputFormat("PNG", "image/png", ".png")
WEBP = OutputFormat("WEBP", "image/webp", ".webp", {"quality": WEBP_QUALITY})
GIF = OutputFormat("GIF", "image/gif", ".gif")

# Closed set of formats a caller may request.
REQUESTABLE_FORMATS: Mapping[str, OutputFormat] = {
    "jpeg": JPEG,
    "jpg": JPEG,
    "png": PNG,
    "webp": WEBP,
}

# Source types that are re-encoded in their own format when no format is requested.
SOURCE_FORMATS: Mapping[str, OutputFormat] = {
    fmt.content_type: fmt for fmt in (JPEG, PNG, WEBP, GIF)
}


def lookup_requested_format(requested: str | None) -> OutputFormat | None:
    """Return the format for a requested name, or None if absent or unrecognized."""
    if not requested:
        return None
    return REQUESTABLE_FORMATS.get(requested.strip().lower())


def resolve_output_format(requested: str | None, source_content_type: str | None) -> OutputFormat:
    """Pick the output format for a transformation.

    The requested format wins when it is recognized. Otherwise the source's
    own format is kept, falling back to JPEG for sources that cannot be
    re-encoded as themselves.
    """
    fmt = lookup_requested_format(requested)
    if fmt is not None:
        return fmt

    if requested:
        logger.warning(
            "Unrecognized output format requested, keeping source format",
            extra={"requested_format": requested, "source_content_type": source_content_type},
        )

    return format_for_content_type(source_content_type or "")


def format_for_content_type(content_type: str) -> OutputFormat:
    """Return the encodable format for a MIME type, JPEG when it has none."""
    return SOURCE_FORMATS.get(content_type.lower(), JPEG)
