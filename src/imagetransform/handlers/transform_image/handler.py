"""
Lambda handler producing a derived image from an owned original.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from imagetransform.core.services.transformation_orchestrator import TransformationOrchestrator
from imagetransform.core.utils.auth import get_requester_id
from imagetransform.core.utils.constants import METRICS_NAMESPACE
from imagetransform.core.utils.decorators import api_gateway_handler
from imagetransform.core.utils.response import ResponseBuilder
from imagetransform.core.utils.validators import parse_json_body, validate_request

from .models import TransformImageBody, TransformImageRequest, TransformImageResponse

logger = Logger(utc=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle transformation requests.

    Expected API Gateway event structure:
    {
        "pathParameters": {"image_id": "img_..."},
        "body": "{\"transformations\": {\"resize\": {\"width\": 50}, \"rotate\": 90}}"
    }

    An image that is absent or owned by someone else yields 404. Malformed
    options and any failure of the pipeline yield 400.

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response describing the derived image
    """
    logger.info(
        "Received image transform request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": getattr(context, "aws_request_id", None),
            "function_name": getattr(context, "function_name", None),
        },
    )

    requester = get_requester_id(event)
    path_params = event.get("pathParameters") or {}
    request = validate_request(TransformImageRequest, {"image_id": path_params.get("image_id")})
    body = validate_request(TransformImageBody, parse_json_body(event))

    orchestrator = TransformationOrchestrator()

    image = orchestrator.guard.owned_image(request.image_id, requester)
    if image is None:
        return ResponseBuilder.not_found(f"Image not found: {request.image_id}")

    record = orchestrator.transform(image, body.transformations, requester)

    metrics.add_metric(name="TransformationsCreated", unit=MetricUnit.Count, value=1)

    response = TransformImageResponse.from_record(record)
    return ResponseBuilder.created(response.model_dump(by_alias=True))
