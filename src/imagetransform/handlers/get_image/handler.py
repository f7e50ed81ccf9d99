"""
Lambda handler returning the metadata of one original image.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from imagetransform.core.models.responses import ImageResponse
from imagetransform.core.services.image_service import ImageService
from imagetransform.core.utils.auth import get_requester_id
from imagetransform.core.utils.constants import METRICS_NAMESPACE
from imagetransform.core.utils.decorators import api_gateway_handler
from imagetransform.core.utils.response import ResponseBuilder
from imagetransform.core.utils.validators import validate_request

from .models import GetImageRequest

logger = Logger(utc=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Return one image owned by the requester.

    An image that is absent or owned by someone else yields 404.
    """
    logger.info(
        "Received get image request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": getattr(context, "aws_request_id", None),
            "function_name": getattr(context, "function_name", None),
        },
    )

    requester = get_requester_id(event)
    path_params = event.get("pathParameters") or {}
    request = validate_request(GetImageRequest, {"image_id": path_params.get("image_id")})

    image = ImageService().get_image(request.image_id, requester)
    if image is None:
        return ResponseBuilder.not_found(f"Image not found: {request.image_id}")

    return ResponseBuilder.ok(ImageResponse.from_record(image).model_dump(by_alias=True))
