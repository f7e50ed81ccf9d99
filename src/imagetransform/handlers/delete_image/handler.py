"""
Lambda handler responsible for deleting an image resource.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from imagetransform.core.services.image_service import ImageService
from imagetransform.core.utils.auth import get_requester_id
from imagetransform.core.utils.constants import METRICS_NAMESPACE
from imagetransform.core.utils.decorators import api_gateway_handler
from imagetransform.core.utils.response import ResponseBuilder
from imagetransform.core.utils.time import utc_now_iso
from imagetransform.core.utils.validators import validate_request

from .models import DeleteImageRequest, DeleteImageResponse

logger = Logger(utc=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle image deletion requests.

    This function:
    - Extracts the image identifier from API Gateway path parameters
    - Deletes the image, and its derived images when cascade is enabled
    - Answers 404 when the image is absent or owned by someone else

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response
    """
    logger.info(
        "Received image delete request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": getattr(context, "aws_request_id", None),
        },
    )

    requester = get_requester_id(event)
    path_params = event.get("pathParameters") or {}
    request = validate_request(DeleteImageRequest, {"image_id": path_params.get("image_id")})

    deleted = ImageService().delete_image(request.image_id, requester)
    if deleted is None:
        return ResponseBuilder.not_found(f"Image not found: {request.image_id}")

    response = DeleteImageResponse(
        image_id=deleted.image_id,
        message="Image deleted successfully",
        deleted_at=utc_now_iso(),
    )

    return ResponseBuilder.ok(response.model_dump(by_alias=True))
