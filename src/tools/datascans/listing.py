"""Data scan listing tool for BigQuery Data Scout."""

import json
import logging

from google.cloud import dataplex_v1

from src.core.config import get_source
from src.core.dataplex import (
    DataScanToolError,
    error_payload,
    failure_detail,
    get_data_scan_client,
)
from src.core.resources import location_parent, state_filter
from src.tools.datascans.common import enum_name, resolve_location, resolve_project
from src.tools.datascans.models import DataScanItem, DataScanList
from server import mcp

logger = logging.getLogger(__name__)

KIND = "bigquery-list-data-scans"
DEFAULT_PAGE_SIZE = 5


def build_list_request(
    project: str, location: str, state: str = "", page_size: int = DEFAULT_PAGE_SIZE
) -> dataplex_v1.ListDataScansRequest:
    """Newest scans first; filtered on state only when one is given."""
    if page_size <= 0:
        raise ValueError("page_size must be greater than 0")

    request = dataplex_v1.ListDataScansRequest(
        parent=location_parent(project, location),
        order_by="create_time desc",
        page_size=page_size,
    )
    filter_expr = state_filter(state)
    if filter_expr:
        request.filter = filter_expr
    return request


def to_item(data_scan) -> DataScanItem:
    create_time = data_scan.create_time
    return DataScanItem(
        name=data_scan.name,
        create_time=create_time.isoformat() if create_time else None,
        state=enum_name(data_scan.state),
    )


def fetch_data_scans(client, request: dataplex_v1.ListDataScansRequest) -> DataScanList:
    """
    List every data scan matching the request, following all pages.

    Raises:
        DataScanToolError: the API call failed
    """
    result = DataScanList(parent=request.parent)
    try:
        # The pager requests further pages while iterating
        for data_scan in client.list_data_scans(request=request):
            result.data_scans.append(to_item(data_scan))
    except Exception as e:
        raise DataScanToolError(
            f"failed to list data scans in {request.parent}: {failure_detail(e)}"
        ) from e
    return result


@mcp.tool()
def list_data_scans(
    location: str = "", project: str = "", state: str = "", page_size: int = DEFAULT_PAGE_SIZE
) -> str:
    """
    Use this tool to get a list of data scans of a project.

    Lists Dataplex data scans (data profile and data quality scans over
    BigQuery tables), newest first.

    Args:
        location: This refers to a Google Cloud region (e.g., "us-central1").
                  Defaults to the location from the server configuration.
        project: The Google Cloud project ID. If not provided, the tool defaults
                 to the project from the source configuration.
        state: State of the datascan (e.g., "ACTIVE", "CREATING", "DELETING").
               If not provided tool will return datascans with any state.
        page_size: Number of results in the search page (default: 5).
                   All pages are returned.

    Returns:
        JSON with the parent location and the data scans:
        {
            "parent": "projects/my-project/locations/us-central1",
            "total": 2,
            "data_scans": [
                {"name": "projects/.../dataScans/orders-profile",
                 "create_time": "2025-06-01T10:00:00+00:00",
                 "state": "ACTIVE"}
            ]
        }

    Examples:
        list_data_scans("us-central1")
        list_data_scans("europe-west1", project="analytics-prod", state="ACTIVE")
    """
    try:
        source = get_source()
        request = build_list_request(
            project=resolve_project(source, project),
            location=resolve_location(source, location),
            state=state,
            page_size=page_size,
        )
        logger.info(f"Listing data scans in {request.parent} (state: {state or 'any'})")
        logger.debug(f"ListDataScans request: {request}")

        client = get_data_scan_client(source)
        result = fetch_data_scans(client, request)

        return json.dumps(result.to_dict(), indent=2)

    except (DataScanToolError, ValueError) as e:
        logger.warning(f"{KIND}: {e}")
        return error_payload(e)
    except Exception as e:
        logger.error(f"Error in list_data_scans: {e}", exc_info=True)
        return error_payload(e)
