"""
Lambda handler responsible for listing the requester's images.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from imagetransform.core.models.responses import ImageResponse
from imagetransform.core.services.image_service import ImageService
from imagetransform.core.utils.auth import get_requester_id
from imagetransform.core.utils.constants import METRICS_NAMESPACE
from imagetransform.core.utils.decorators import api_gateway_handler
from imagetransform.core.utils.pagination import PagePagination
from imagetransform.core.utils.response import ResponseBuilder
from imagetransform.core.utils.validators import validate_request

from .models import ListImagesRequest, ListImagesResponse

logger = Logger(utc=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle requests to list images.

    Only images owned by the requester are returned, newest first.

    Supported query parameters:
    - page: zero-based page number (default 0)
    - limit: page size (default 10, max 100); 0 returns every image

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response
    """
    logger.info(
        "Received image list request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "query_params": event.get("queryStringParameters"),
            "request_id": getattr(context, "aws_request_id", None),
        },
    )

    requester = get_requester_id(event)
    query_params = event.get("queryStringParameters") or {}
    request = validate_request(ListImagesRequest, query_params)

    images, total_count, _ = ImageService().list_images_page(
        requester, page=request.page, limit=request.limit
    )

    response = ListImagesResponse(
        images=[ImageResponse.from_record(image) for image in images],
        total_count=total_count,
        returned_count=len(images),
        pagination=PagePagination.get_page_info(request.page, request.limit, total_count),
    )

    return ResponseBuilder.ok(response.model_dump(by_alias=True))
