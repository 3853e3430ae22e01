"""Resource name helpers for Dataplex and BigQuery."""

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from google.cloud import dataplex_v1

BIGQUERY_RESOURCE_PREFIX = "//bigquery.googleapis.com"

DATA_SCAN_NAME_RE = re.compile(
    r"^projects/(?P<project>[^/]+)/locations/(?P<location>[^/]+)"
    r"/dataScans/(?P<data_scan_id>[^/]+)$"
)

# Catalog entry type suffix -> BigQuery resource type
TYPE_MAP = {
    "bigquery-connection": "CONNECTION",
    "bigquery-data-policy": "POLICY",
    "bigquery-dataset": "DATASET",
    "bigquery-model": "MODEL",
    "bigquery-routine": "ROUTINE",
    "bigquery-table": "TABLE",
    "bigquery-view": "VIEW",
}

MAX_DATA_SCAN_ID_LENGTH = 63


@dataclass(frozen=True)
class DataScanName:
    project: str
    location: str
    data_scan_id: str


def location_parent(project: str, location: str) -> str:
    return f"projects/{project}/locations/{location}"


def parse_data_scan_name(name: str) -> DataScanName:
    """
    Split a data scan resource name into its parts.

    Raises:
        ValueError: name is not projects/{p}/locations/{l}/dataScans/{id}
    """
    match = DATA_SCAN_NAME_RE.match(name.strip())
    if not match:
        raise ValueError(
            f"invalid data scan name {name!r}, expected "
            "projects/{project}/locations/{location}/dataScans/{data_scan_id}"
        )
    return DataScanName(**match.groupdict())


def bigquery_table_resource(project: str, dataset: str, table: str) -> str:
    return f"{BIGQUERY_RESOURCE_PREFIX}/projects/{project}/datasets/{dataset}/tables/{table}"


def extract_type(resource: str) -> str:
    """
    Map the last path segment of a catalog entry type to a resource type.

    A string without "/" is returned as is; unknown types map to "".
    """
    _, sep, suffix = resource.rpartition("/")
    if not sep:
        return resource
    return TYPE_MAP.get(suffix, "")


def state_filter(state: str) -> str:
    """
    List filter selecting scans in one state, "" for any state.

    Raises:
        ValueError: not a data scan state name
    """
    state = state.strip().upper()
    if not state:
        return ""
    if state not in dataplex_v1.State.__members__:
        known = ", ".join(dataplex_v1.State.__members__)
        raise ValueError(f"unknown data scan state {state!r}, expected one of: {known}")
    return f'state="{state}"'


def make_data_scan_id(table: str, now: Optional[datetime] = None) -> str:
    """
    Generate a data scan id for profiling a table.

    Ids must be lowercase letters, digits and hyphens, start with a letter
    and be at most 63 characters.
    """
    timestamp = (now or datetime.now()).strftime("%Y%m%d%H%M%S")
    slug = re.sub(r"[^a-z0-9]+", "-", table.lower()).strip("-")

    room = MAX_DATA_SCAN_ID_LENGTH - len("profile--") - len(timestamp)
    slug = slug[:room].rstrip("-")

    if not slug:
        return f"profile-{timestamp}"
    return f"profile-{slug}-{timestamp}"
