"""
Standard intake response bodies and API Gateway response utilities
"""

import json
from typing import Any, Dict


def accepted_body(log_id: str) -> Dict[str, str]:
    """Body returned once a submission has been enqueued"""
    return {"message": "Accepted", "log_id": log_id}


def error_body(error: str) -> Dict[str, str]:
    """Body returned for rejected or failed submissions"""
    return {"error": error}


def create_api_response(status_code: int, body: Dict[str, Any], headers: Dict[str, str] = None) -> Dict[str, Any]:
    """
    Create a raw API Gateway proxy response

    Args:
        status_code: HTTP status code
        body: JSON-serializable response body
        headers: Additional HTTP headers

    Returns:
        API Gateway response dictionary
    """
    default_headers = {"Content-Type": "application/json"}
    if headers:
        default_headers.update(headers)

    return {
        "statusCode": status_code,
        "headers": default_headers,
        "body": json.dumps(body, default=str)
    }


def internal_error_response(message: str = "Internal server error") -> Dict[str, Any]:
    """
    Create a 500 Internal Server Error response

    Args:
        message: Error message

    Returns:
        API Gateway 500 response
    """
    return create_api_response(500, error_body(message))
