"""Requester identity resolution for API Gateway events."""

from typing import Any

from imagetransform.core.models.errors import UnauthorizedError


def get_requester_id(event: dict[str, Any]) -> str:
    """Return the authenticated user id placed in the event by the API Gateway authorizer.

    Cognito user pool authorizers expose it as `claims.sub`; Lambda
    authorizers as `principalId` or a `user_id` context entry.

    Raises:
        UnauthorizedError: If no requester can be found
    """
    authorizer = (event.get("requestContext") or {}).get("authorizer") or {}
    claims = authorizer.get("claims") or {}

    for candidate in (claims.get("sub"), authorizer.get("principalId"), authorizer.get("user_id")):
        if isinstance(candidate, str) and candidate.strip():
            return candidate.strip()

    raise UnauthorizedError()
