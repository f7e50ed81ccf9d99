"""
Lambda handler listing every derived image owned by the requester.
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

from .models import ListTransformedImagesResponse

logger = Logger(utc=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """List the requester's derived images across all originals, newest first."""
    logger.info(
        "Received list transformed images request",
        extra={
            "path": event.get("path"),
            "request_id": getattr(context, "aws_request_id", None),
        },
    )

    requester = get_requester_id(event)
    records = TransformationOrchestrator().list_owner_transformations(requester)

    response = ListTransformedImagesResponse(
        transformations=[TransformedImageResponse.from_record(record) for record in records],
        total_count=len(records),
    )

    return ResponseBuilder.ok(response.model_dump(by_alias=True))
