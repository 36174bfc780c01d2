from .responses import CORS_HEADERS, error_response, json_response

__all__ = ["CORS_HEADERS", "error_response", "json_response"]
