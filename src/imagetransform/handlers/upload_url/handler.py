"""
Lambda handler issuing presigned URLs for direct uploads to storage.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from imagetransform.core.services.access_url_issuer import AccessUrlIssuer
from imagetransform.core.utils.auth import get_requester_id
from imagetransform.core.utils.constants import METRICS_NAMESPACE
from imagetransform.core.utils.decorators import api_gateway_handler
from imagetransform.core.utils.response import ResponseBuilder
from imagetransform.core.utils.validators import parse_json_body, validate_request

from .models import UploadUrlRequest, UploadUrlResponse

logger = Logger(utc=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Issue a presigned PUT URL under the requester's storage prefix.

    The client uploads the file with the returned URL and then registers it
    through the save-metadata route using the returned storage key.
    """
    logger.info(
        "Received upload URL request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": getattr(context, "aws_request_id", None),
        },
    )

    requester = get_requester_id(event)
    request = validate_request(UploadUrlRequest, parse_json_body(event))

    key = AccessUrlIssuer.build_upload_key(requester, request.filename)
    access_url = AccessUrlIssuer().issue_upload(key, request.content_type)

    response = UploadUrlResponse(
        upload_url=access_url.url,
        storage_key=key,
        expires_in=access_url.expires_in,
    )

    return ResponseBuilder.ok(response.model_dump(by_alias=True))
