"""
Lambda handler issuing presigned download URLs for original images.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from imagetransform.core.infrastructure.aws.dynamodb_metadata import DynamoDBArtifactRepository
from imagetransform.core.models.responses import AccessUrlResponse
from imagetransform.core.services.access_guard import AccessGuard
from imagetransform.core.services.access_url_issuer import AccessUrlIssuer
from imagetransform.core.utils.auth import get_requester_id
from imagetransform.core.utils.constants import METRICS_NAMESPACE
from imagetransform.core.utils.decorators import api_gateway_handler
from imagetransform.core.utils.response import ResponseBuilder
from imagetransform.core.utils.validators import validate_request

from .models import ImageDownloadUrlRequest

logger = Logger(utc=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Issue a one-hour download URL for an image owned by the requester.

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response
    """
    logger.info(
        "Received image download URL request",
        extra={
            "path": event.get("path"),
            "request_id": getattr(context, "aws_request_id", None),
        },
    )

    requester = get_requester_id(event)
    path_params = event.get("pathParameters") or {}
    request = validate_request(ImageDownloadUrlRequest, {"image_id": path_params.get("image_id")})

    image = AccessGuard(DynamoDBArtifactRepository()).owned_image(request.image_id, requester)
    if image is None:
        return ResponseBuilder.not_found(f"Image not found: {request.image_id}")

    access_url = AccessUrlIssuer().issue_download(image.storage_key)

    response = AccessUrlResponse(download_url=access_url.url, expires_in=access_url.expires_in)
    return ResponseBuilder.ok(response.model_dump(by_alias=True))
