"""Caller access token handling for client-authorized sources."""

import logging

from fastmcp.server.dependencies import get_http_headers

logger = logging.getLogger(__name__)

AUTH_TOKEN_HEADER = "Authorization"


def get_auth_token_header_name() -> str:
    """Name of the HTTP header carrying the caller's token."""
    return AUTH_TOKEN_HEADER


def get_request_access_token() -> str:
    """
    Get the raw Authorization header of the current MCP request.

    Returns:
        Header value, or "" when not serving an HTTP request (e.g. stdio)
    """
    headers = get_http_headers(include_all=True)
    # Starlette lower-cases header names
    value = headers.get(get_auth_token_header_name().lower(), "")
    if not value:
        logger.debug("No Authorization header on the current request")
    return value


def parse_bearer_token(value: str) -> str:
    """
    Extract the token from a "Bearer <token>" header value.

    Raises:
        ValueError: header missing, not a bearer token, or token empty
    """
    if not value or not value.strip():
        raise ValueError(f"missing {AUTH_TOKEN_HEADER} header")

    parts = value.strip().split(None, 1)
    if parts[0].lower() != "bearer":
        raise ValueError("authorization header must be in the format 'Bearer <token>'")

    if len(parts) < 2 or not parts[1].strip():
        raise ValueError("bearer token is empty")

    return parts[1].strip()
