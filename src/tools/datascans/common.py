"""Shared helpers for data scan tools."""

from src.core.source import BigQuerySource


def enum_name(value) -> str:
    """Name of a proto enum value; plain ints (unknown values) as strings."""
    return getattr(value, "name", str(value))


def data_source_of(data_scan) -> str:
    """The scanned resource: BigQuery table resource or Dataplex entity."""
    return data_scan.data.resource or data_scan.data.entity


def resolve_project(source: BigQuerySource, project: str) -> str:
    project = (project or "").strip()
    return project or source.bigquery_project()


def resolve_location(source: BigQuerySource, location: str) -> str:
    """
    Requested location, falling back to the configured default.

    Raises:
        ValueError: neither given
    """
    location = (location or "").strip() or (source.location or "")
    if not location:
        raise ValueError("location parameter is required")
    return location
