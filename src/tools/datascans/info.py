"""Data scan detail tool for BigQuery Data Scout."""

import json
import logging

from google.cloud import dataplex_v1

from src.core.config import get_source
from src.core.dataplex import (
    DataScanToolError,
    api_error_message,
    error_payload,
    get_data_scan_client,
)
from src.core.resources import parse_data_scan_name
from src.tools.datascans.common import data_source_of, enum_name
from src.tools.datascans.models import DataScanInfo
from server import mcp

logger = logging.getLogger(__name__)

KIND = "bigquery-get-data-scan-info"


def build_get_request(name: str) -> dataplex_v1.GetDataScanRequest:
    name = (name or "").strip()
    if not name:
        raise ValueError("name is required.")
    parse_data_scan_name(name)

    return dataplex_v1.GetDataScanRequest(
        name=name,
        view=dataplex_v1.GetDataScanRequest.DataScanView.FULL,
    )


def to_info(data_scan) -> DataScanInfo:
    result = None
    if "data_profile_result" in data_scan:
        profile = data_scan.data_profile_result
        result = type(profile).to_dict(profile, use_integers_for_enums=False)

    return DataScanInfo(
        data_scan_name=data_scan.name,
        display_name=data_scan.display_name,
        data_source=data_source_of(data_scan),
        type=enum_name(data_scan.type_),
        state=enum_name(data_scan.state),
        result=result,
    )


def fetch_data_scan(client, request: dataplex_v1.GetDataScanRequest, project: str) -> DataScanInfo:
    """
    Fetch one data scan with its latest results.

    Raises:
        DataScanToolError: the API call failed
    """
    try:
        data_scan = client.get_data_scan(request=request)
    except Exception as e:
        message = api_error_message(e)
        if message is not None:
            raise DataScanToolError(
                f'failed to get data scan for project "{project}" with error: {message}'
            ) from e
        raise DataScanToolError(f'failed to get data scan for project "{project}"') from e

    return to_info(data_scan)


@mcp.tool()
def get_data_scan_info(name: str) -> str:
    """
    Use this tool to view data profile scan and insight generation scan results.

    Fetches a data scan with the FULL view, including the latest data profile
    result: row count, and per-column statistics such as null ratio, distinct
    ratio, top values, min/max and quartiles.

    Args:
        name: The resource name of the dataScan, e.g.
              "projects/my-project/locations/us-central1/dataScans/orders-profile".
              Use list_data_scans() to find names.

    Returns:
        JSON with scan details:
        {
            "data_scan_name": "projects/.../dataScans/orders-profile",
            "display_name": "Orders profile",
            "data_source": "//bigquery.googleapis.com/projects/.../tables/orders",
            "type": "DATA_PROFILE",
            "state": "ACTIVE",
            "result": {"row_count": "1200", "profile": {"fields": [...]}, ...}
        }
        "result" is null when the scan has not produced a profile yet.

    Example:
        get_data_scan_info("projects/my-project/locations/us-central1/dataScans/orders-profile")
    """
    try:
        request = build_get_request(name)
        source = get_source()
        logger.info(f"Getting data scan {request.name}")
        logger.debug(f"GetDataScan request: {request}")

        client = get_data_scan_client(source)
        info = fetch_data_scan(client, request, source.bigquery_project())

        return json.dumps(info.to_dict(), indent=2, default=str)

    except (DataScanToolError, ValueError) as e:
        logger.warning(f"{KIND}: {e}")
        return error_payload(e)
    except Exception as e:
        logger.error(f"Error in get_data_scan_info: {e}", exc_info=True)
        return error_payload(e)
