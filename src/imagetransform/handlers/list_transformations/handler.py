"""
Lambda handler listing the derived images of an original.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from imagetransform.core.models.responses import TransformedImageResponse
from imagetransform.core.services.transformation_orchestrator import TransformationOrchestrator
from imagetransform.core.utils.auth import get_requester_id
from imagetransform.core.utils.constants import METRICS_NAMESPACE
from imagetransform.core.utils.decorators import api_gateway_handler
from imagetransform.core.utils.response import ResponseBuilder
from imagetransform.core.utils.validators import validate_request

from .models import ListTransformationsRequest, ListTransformationsResponse

logger = Logger(utc=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """List derived images of an image owned by the requester, newest first."""
    logger.info(
        "Received list transformations request",
        extra={
            "path": event.get("path"),
            "request_id": getattr(context, "aws_request_id", None),
        },
    )

    requester = get_requester_id(event)
    path_params = event.get("pathParameters") or {}
    request = validate_request(ListTransformationsRequest, {"image_id": path_params.get("image_id")})

    records = TransformationOrchestrator().list_transformations(request.image_id, requester)
    if records is None:
        return ResponseBuilder.not_found(f"Image not found: {request.image_id}")

    response = ListTransformationsResponse(
        image_id=request.image_id,
        transformations=[TransformedImageResponse.from_record(record) for record in records],
        total_count=len(records),
    )

    return ResponseBuilder.ok(response.model_dump(by_alias=True))
