"""
API Gateway proxy event helpers shared by the Lambda handlers.
"""

import json
import base64
from typing import Any, Dict, Optional

from ..core.errors import InternalError, MethodNotAllowed, QuoteAssistantError


CORS_HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
}


def get_method(event: Dict[str, Any]) -> Optional[str]:
    """Return the HTTP method of a REST API (v1) or HTTP API (v2) event."""
    method = event.get("httpMethod")
    if method is None:
        method = event.get("requestContext", {}).get("http", {}).get("method")
    return method.upper() if isinstance(method, str) else None


def require_post(event: Dict[str, Any]):
    if get_method(event) != "POST":
        raise MethodNotAllowed()


def parse_body(event: Dict[str, Any]) -> Dict[str, Any]:
    """
    Decode the JSON request body.

    Raises:
        InternalError: The body is not a JSON object
    """
    raw = event.get("body")
    if raw is None or raw == "":
        return {}

    try:
        if event.get("isBase64Encoded"):
            raw = base64.b64decode(raw).decode("utf-8")
        body = json.loads(raw)
    except ValueError as e:
        raise InternalError(f"Invalid JSON body: {str(e)}") from e

    if not isinstance(body, dict):
        raise InternalError("Request body must be a JSON object")
    return body


def json_response(status_code: int, payload: Any) -> Dict[str, Any]:
    return {
        "statusCode": status_code,
        "headers": dict(CORS_HEADERS),
        "body": json.dumps(payload),
    }


def error_response(error: Exception) -> Dict[str, Any]:
    """Render an exception as ``{"error": message}`` with its status code."""
    if isinstance(error, QuoteAssistantError):
        return json_response(error.status_code, {"error": error.message})
    return json_response(500, {"error": str(error)})
