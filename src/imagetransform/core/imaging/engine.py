"""Pure image transformation pipeline.

The engine performs no I/O: it decodes source bytes, applies the requested
operations in a fixed order and encodes the result.

Order of operations:
1. Decode and normalize to RGB (RGBA when the source has transparency)
2. Crop
3. Resize
4. Rotate
5. Filters (grayscale, then sepia)
6. Encode
"""

from io import BytesIO

from aws_lambda_powertools import Logger
from PIL import Image, UnidentifiedImageError

from imagetransform.core.imaging.filters import apply_grayscale, apply_sepia
from imagetransform.core.models.errors import DecodeError, EncodeError, InvalidOptionsError
from imagetransform.core.models.transformation import (
    CropOptions,
    ResizeOptions,
    TransformationOptions,
)
from imagetransform.core.utils.constants import MAX_DIMENSION
from imagetransform.core.utils.mime import OutputFormat, resolve_output_format

logger = Logger(utc=True)


class TransformationEngine:
    """Applies a transformation request to raw image bytes."""

    def apply(
        self,
        source: bytes,
        options: TransformationOptions,
        *,
        source_content_type: str | None = None,
    ) -> tuple[bytes, str]:
        """Transform an image.

        Args:
            source: Encoded source image
            options: Validated transformation request
            source_content_type: Content type recorded for the source; detected
                from the decoded image when omitted

        Returns:
            Tuple of (encoded_bytes, content_type)

        Raises:
            DecodeError: If the source is not a recognizable raster image
            InvalidOptionsError: If the crop region exceeds the source bounds
                or the output would be too large
            EncodeError: If the output format cannot be written
        """
        image, detected_type = self.decode(source)
        content_type = source_content_type or detected_type
        output_format = resolve_output_format(options.requested_format, content_type)

        logger.debug(
            "Applying transformation",
            extra={
                "source_size": image.size,
                "options": options.to_json(),
                "output_format": output_format.pillow_format,
            },
        )

        try:
            if options.crop is not None:
                image = self.crop(image, options.crop)

            if options.resize is not None:
                image = self.resize(image, options.resize)

            if options.rotation:
                image = self.rotate(image, options.rotation)

            # Order is fixed: grayscale output is still a valid RGB triple for sepia.
            if options.grayscale:
                image = apply_grayscale(image)
            if options.sepia:
                image = apply_sepia(image)

            data = self.encode(image, output_format)
        except MemoryError as exc:
            logger.warning(
                "Transformation exceeded available memory",
                extra={"image_size": image.size, "options": options.to_json()},
            )
            raise InvalidOptionsError(
                message="Requested output is too large to process",
                details={"max_dimension": MAX_DIMENSION},
            ) from exc

        return data, output_format.content_type

    @staticmethod
    def decode(source: bytes) -> tuple[Image.Image, str | None]:
        """Decode bytes into a normalized RGB/RGBA image and its detected MIME type."""
        try:
            with Image.open(BytesIO(source)) as decoded:
                decoded.load()
                detected_type = Image.MIME.get(decoded.format or "")
                has_alpha = decoded.mode in ("RGBA", "LA", "PA") or (
                    decoded.mode == "P" and "transparency" in decoded.info
                )
                image = decoded.convert("RGBA" if has_alpha else "RGB")
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError) as exc:
            logger.warning("Unable to decode source image", extra={"size": len(source)})
            raise DecodeError(
                message="Source is not a readable image",
                details={"size": len(source)},
            ) from exc

        return image, detected_type

    @staticmethod
    def crop(image: Image.Image, crop: CropOptions) -> Image.Image:
        width, height = image.size
        if crop.x + crop.width > width or crop.y + crop.height > height:
            raise InvalidOptionsError(
                message="Crop region exceeds image bounds",
                details={
                    "crop": crop.model_dump(),
                    "image_width": width,
                    "image_height": height,
                },
            )

        return image.crop((crop.x, crop.y, crop.x + crop.width, crop.y + crop.height))

    @staticmethod
    def resize(image: Image.Image, resize: ResizeOptions) -> Image.Image:
        width, height = image.size

        if resize.width is not None and resize.height is not None:
            target = (resize.width, resize.height)
        elif resize.width is not None:
            target = (resize.width, max(1, round(resize.width * height / width)))
        else:
            assert resize.height is not None
            target = (max(1, round(resize.height * width / height)), resize.height)

        if max(target) > MAX_DIMENSION:
            raise InvalidOptionsError(
                message=f"Resized image would exceed {MAX_DIMENSION} pixels per side",
                details={"target_width": target[0], "target_height": target[1]},
            )

        if target == image.size:
            return image

        return image.resize(target, Image.Resampling.LANCZOS)

    @staticmethod
    def rotate(image: Image.Image, degrees: int) -> Image.Image:
        """Rotate clockwise, growing the canvas to fit the rotated bounding box."""
        # Pillow rotates counter-clockwise.
        return image.rotate(-degrees, resample=Image.Resampling.BICUBIC, expand=True)

    @staticmethod
    def encode(image: Image.Image, output_format: OutputFormat) -> bytes:
        if image.mode == "RGBA" and not output_format.supports_alpha:
            image = image.convert("RGB")

        buffer = BytesIO()
        try:
            image.save(buffer, format=output_format.pillow_format, **output_format.save_options)
        except (OSError, KeyError, ValueError) as exc:
            logger.warning(
                "Unable to encode image",
                extra={"format": output_format.pillow_format, "mode": image.mode},
            )
            raise EncodeError(
                message=f"Unable to encode image as {output_format.pillow_format}",
                details={"format": output_format.pillow_format},
            ) from exc

        return buffer.getvalue()
