"""
Lambda handler recording metadata for an image uploaded through a presigned URL.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from imagetransform.core.models.responses import ImageResponse
from imagetransform.core.services.image_service import ImageService
from imagetransform.core.utils.auth import get_requester_id
from imagetransform.core.utils.constants import METRICS_NAMESPACE
from imagetransform.core.utils.decorators import api_gateway_handler
from imagetransform.core.utils.response import ResponseBuilder
from imagetransform.core.utils.validators import parse_json_body, validate_request

from .models import RegisterImageRequest

logger = Logger(utc=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle save-metadata requests.

    The storage key must lie under the requester's own prefix; registering
    someone else's key is rejected with 403.
    """
    logger.info(
        "Received image registration request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": getattr(context, "aws_request_id", None),
        },
    )

    requester = get_requester_id(event)
    request = validate_request(RegisterImageRequest, parse_json_body(event))

    image = ImageService().register_image(
        owner_id=requester,
        storage_key=request.storage_key,
        original_name=request.original_name,
        content_type=request.content_type,
        file_size=request.file_size,
    )

    metrics.add_metric(name="ImagesRegistered", unit=MetricUnit.Count, value=1)

    return ResponseBuilder.created(ImageResponse.from_record(image).model_dump(by_alias=True))
