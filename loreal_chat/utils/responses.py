"""Response utility functions."""

from typing import Any

from fastapi import status
from fastapi.responses import JSONResponse

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def json_response(content: Any, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    """JSON response carrying the permissive CORS headers."""
    return JSONResponse(content=content, status_code=status_code, headers=dict(CORS_HEADERS))


def error_response(message: str, status_code: int = status.HTTP_400_BAD_REQUEST) -> JSONResponse:
    """Create standardized error response."""
    return json_response({"error": message}, status_code=status_code)
