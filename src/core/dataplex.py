"""Dataplex client acquisition and error wrapping shared by the tools."""

import json
import logging
from typing import Optional

from google.api_core.exceptions import GoogleAPICallError
from google.auth.exceptions import DefaultCredentialsError
from google.cloud import dataplex_v1

from src.core.auth import get_request_access_token, parse_bearer_token
from src.core.source import BigQuerySource

logger = logging.getLogger(__name__)


class DataScanToolError(Exception):
    """A data scan tool call failed; the message is safe to show the caller."""


def get_data_scan_client(
    source: BigQuerySource, access_token: Optional[str] = None
) -> dataplex_v1.DataScanServiceClient:
    """
    Get the client a tool call should use.

    With client authorization the caller's bearer token (from the argument
    or the current request) is turned into a dedicated client.

    Raises:
        DataScanToolError: token missing/invalid or client creation failed
    """
    try:
        client, client_creator = source.make_data_scan_client()
    except DefaultCredentialsError as e:
        raise DataScanToolError(f"error creating Dataplex client: {e}") from e

    if not source.use_client_authorization():
        return client

    if access_token is None:
        access_token = get_request_access_token()

    try:
        token = parse_bearer_token(access_token)
    except ValueError as e:
        raise DataScanToolError(f"error parsing access token: {e}") from e

    try:
        return client_creator(token)
    except Exception as e:
        raise DataScanToolError(
            f"error creating client from OAuth access token: {e}"
        ) from e


def api_error_message(err: Exception) -> Optional[str]:
    """Status message reported by the service, or None for non-API errors."""
    if isinstance(err, GoogleAPICallError):
        return err.message
    return None


def error_payload(err: Exception) -> str:
    """JSON error body returned to the MCP caller."""
    return json.dumps({"_error": True, "message": str(err)})


def failure_detail(err: Exception) -> str:
    """Service status message when there is one, else the error text."""
    message = api_error_message(err)
    return message if message is not None else str(err)
