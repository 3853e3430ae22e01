"""Data profile scan creation tool for BigQuery Data Scout."""

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
from src.core.resources import bigquery_table_resource, location_parent, make_data_scan_id
from src.tools.datascans.common import (
    data_source_of,
    enum_name,
    resolve_location,
    resolve_project,
)
from src.tools.datascans.models import DataProfileScan
from server import mcp

logger = logging.getLogger(__name__)

KIND = "bigquery-data-profile"
DEFAULT_SAMPLING_PERCENT = 10.0


def build_create_request(
    project: str,
    location: str,
    dataset: str,
    table: str,
    data_scan_id: str = "",
    display_name: str = "",
    sampling_percent: float = DEFAULT_SAMPLING_PERCENT,
) -> dataplex_v1.CreateDataScanRequest:
    """On-demand data profile scan over one BigQuery table."""
    dataset = (dataset or "").strip()
    table = (table or "").strip()
    if not dataset:
        raise ValueError("dataset is required")
    if not table:
        raise ValueError("table is required")
    if not 0 < sampling_percent <= 100:
        raise ValueError("sampling_percent must be greater than 0 and at most 100")

    data_scan = dataplex_v1.DataScan(
        display_name=display_name or f"Profile of {dataset}.{table}",
        data=dataplex_v1.DataSource(
            resource=bigquery_table_resource(project, dataset, table),
        ),
        execution_spec=dataplex_v1.DataScan.ExecutionSpec(
            trigger=dataplex_v1.Trigger(on_demand=dataplex_v1.Trigger.OnDemand()),
        ),
        data_profile_spec=dataplex_v1.DataProfileSpec(sampling_percent=sampling_percent),
    )

    return dataplex_v1.CreateDataScanRequest(
        parent=location_parent(project, location),
        data_scan_id=(data_scan_id or "").strip() or make_data_scan_id(table),
        data_scan=data_scan,
    )


def create_profile_scan(
    client,
    request: dataplex_v1.CreateDataScanRequest,
    project: str,
    timeout: float,
    run_now: bool = True,
) -> DataProfileScan:
    """
    Create the scan, wait for the operation and optionally start a job.

    Raises:
        DataScanToolError: creating or running the scan failed
    """
    try:
        operation = client.create_data_scan(request=request)
        data_scan = operation.result(timeout=timeout)
    except Exception as e:
        raise DataScanToolError(
            f'failed to create data scan for project "{project}": {failure_detail(e)}'
        ) from e

    logger.info(f"Created data scan {data_scan.name}")

    result = DataProfileScan(
        data_scan_name=data_scan.name,
        display_name=data_scan.display_name,
        data_source=data_source_of(data_scan),
        state=enum_name(data_scan.state),
        sampling_percent=request.data_scan.data_profile_spec.sampling_percent,
    )

    if run_now:
        try:
            response = client.run_data_scan(
                request=dataplex_v1.RunDataScanRequest(name=data_scan.name)
            )
        except Exception as e:
            raise DataScanToolError(
                f"failed to run data scan {data_scan.name}: {failure_detail(e)}"
            ) from e
        result.job_name = response.job.name
        logger.info(f"Started data scan job {result.job_name}")

    return result


@mcp.tool()
def create_data_profile_scan(
    dataset: str,
    table: str,
    location: str = "",
    project: str = "",
    data_scan_id: str = "",
    display_name: str = "",
    sampling_percent: float = DEFAULT_SAMPLING_PERCENT,
    run_now: bool = True,
) -> str:
    """
    Use this tool to analyze and understand tables by generating statistical insights.

    Creates an on-demand Dataplex data profile scan for a BigQuery table and,
    by default, starts it right away. Once the job finishes, read the profile
    with get_data_scan_info().

    Args:
        dataset: BigQuery dataset ID containing the table
        table: BigQuery table ID to profile
        location: Google Cloud region for the scan (should match the dataset
                  location). Defaults to the location from the server configuration.
        project: Project owning both the table and the scan. Defaults to the
                 project from the source configuration.
        data_scan_id: Optional scan ID. Auto-generated when empty:
                      profile-{table}-{timestamp}
        display_name: Optional display name (default: "Profile of {dataset}.{table}")
        sampling_percent: Percentage of rows to sample, in (0, 100] (default: 10.0)
        run_now: Start a scan job immediately after creation (default: True)

    Returns:
        JSON with the created scan:
        {
            "data_scan_name": "projects/.../dataScans/profile-orders-20250601100000",
            "display_name": "Profile of sales.orders",
            "data_source": "//bigquery.googleapis.com/projects/.../tables/orders",
            "state": "ACTIVE",
            "sampling_percent": 10.0,
            "job_name": "projects/.../dataScans/.../jobs/..."
        }

    Examples:
        create_data_profile_scan("sales", "orders", location="us-central1")
        create_data_profile_scan("sales", "orders", sampling_percent=100, run_now=False)
    """
    try:
        source = get_source()
        project = resolve_project(source, project)
        request = build_create_request(
            project=project,
            location=resolve_location(source, location),
            dataset=dataset,
            table=table,
            data_scan_id=data_scan_id,
            display_name=display_name,
            sampling_percent=sampling_percent,
        )
        logger.info(
            f"Creating data profile scan {request.data_scan_id} in {request.parent} "
            f"for {request.data_scan.data.resource}"
        )
        logger.debug(f"CreateDataScan request: {request}")

        client = get_data_scan_client(source)
        result = create_profile_scan(
            client, request, project, timeout=source.operation_timeout, run_now=run_now
        )

        return json.dumps(result.to_dict(), indent=2)

    except (DataScanToolError, ValueError) as e:
        logger.warning(f"{KIND}: {e}")
        return error_payload(e)
    except Exception as e:
        logger.error(f"Error in create_data_profile_scan: {e}", exc_info=True)
        return error_payload(e)
