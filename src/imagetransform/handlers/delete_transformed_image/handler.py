"""
Lambda handler responsible for deleting a derived image.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from imagetransform.core.services.transformation_orchestrator import TransformationOrchestrator
from imagetransform.core.utils.auth import get_requester_id
from imagetransform.core.utils.constants import METRICS_NAMESPACE
from imagetransform.core.utils.decorators import api_gateway_handler
from imagetransform.core.utils.response import ResponseBuilder
from imagetransform.core.utils.time import utc_now_iso
from imagetransform.core.utils.validators import validate_request

from .models import DeleteTransformedImageRequest, DeleteTransformedImageResponse

logger = Logger(utc=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle derived image deletion requests.

    The blob is removed first, then its metadata. A derived image that is
    absent or owned by someone else yields 404.
    """
    logger.info(
        "Received transformed image delete request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": getattr(context, "aws_request_id", None),
        },
    )

    requester = get_requester_id(event)
    path_params = event.get("pathParameters") or {}
    request = validate_request(
        DeleteTransformedImageRequest,
        {"transformed_image_id": path_params.get("transformed_image_id")},
    )

    deleted = TransformationOrchestrator().delete_transformed_image(
        request.transformed_image_id, requester
    )
    if deleted is None:
        return ResponseBuilder.not_found(
            f"Transformed image not found: {request.transformed_image_id}"
        )

    response = DeleteTransformedImageResponse(
        transformed_image_id=deleted.transformed_image_id,
        original_image_id=deleted.parent_image_id,
        message="Transformed image deleted successfully",
        deleted_at=utc_now_iso(),
    )

    return ResponseBuilder.ok(response.model_dump(by_alias=True))
