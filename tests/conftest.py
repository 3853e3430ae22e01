"""Test configuration and fixtures for BigQuery Data Scout."""

from datetime import datetime, timezone

import pytest
from google.cloud import dataplex_v1

from src.core import config
from src.core.source import BigQuerySource

PROJECT = "test-project"
LOCATION = "us-central1"
SCAN_NAME = f"projects/{PROJECT}/locations/{LOCATION}/dataScans/orders-profile"
TABLE_RESOURCE = (
    f"//bigquery.googleapis.com/projects/{PROJECT}/datasets/sales/tables/orders"
)


def tool_fn(tool):
    """Underlying function of an @mcp.tool() object."""
    return getattr(tool, "fn", tool)


def make_data_scan(name=SCAN_NAME, **kwargs) -> dataplex_v1.DataScan:
    kwargs.setdefault("display_name", "Orders profile")
    kwargs.setdefault("data", dataplex_v1.DataSource(resource=TABLE_RESOURCE))
    kwargs.setdefault("state", dataplex_v1.State.ACTIVE)
    kwargs.setdefault("create_time", datetime(2025, 6, 1, 10, 0, tzinfo=timezone.utc))
    return dataplex_v1.DataScan(name=name, **kwargs)


class FakeOperation:
    def __init__(self, result=None, error=None):
        self._result = result
        self._error = error
        self.timeout = None

    def result(self, timeout=None):
        self.timeout = timeout
        if self._error:
            raise self._error
        return self._result


class FakeDataScanClient:
    """Records requests and answers with canned Dataplex messages."""

    def __init__(
        self,
        pages=None,
        data_scan=None,
        created=None,
        job_name="",
        error=None,
        run_error=None,
    ):
        self.pages = pages or []
        self.data_scan = data_scan
        self.created = created
        self.job_name = job_name
        self.error = error
        self.run_error = run_error
        self.requests = []
        self.operation = None

    def _pager(self):
        for page in self.pages:
            for item in page:
                yield item
        if self.error:
            raise self.error

    def list_data_scans(self, request=None):
        self.requests.append(request)
        return self._pager()

    def get_data_scan(self, request=None):
        self.requests.append(request)
        if self.error:
            raise self.error
        return self.data_scan

    def create_data_scan(self, request=None):
        self.requests.append(request)
        self.operation = FakeOperation(result=self.created, error=self.error)
        return self.operation

    def run_data_scan(self, request=None):
        self.requests.append(request)
        if self.run_error:
            raise self.run_error
        return dataplex_v1.RunDataScanResponse(
            job=dataplex_v1.DataScanJob(name=self.job_name)
        )


@pytest.fixture(autouse=True)
def clean_config():
    """Make sure no cached config leaks between tests."""
    config.reset_config()
    yield
    config.reset_config()


@pytest.fixture
def source() -> BigQuerySource:
    return BigQuerySource(project=PROJECT, location=LOCATION, operation_timeout=30)


@pytest.fixture
def use_fake_client(monkeypatch, source):
    """Point a tool module at the test source and a fake client."""

    def _install(module, client):
        monkeypatch.setattr(module, "get_source", lambda: source)
        monkeypatch.setattr(module, "get_data_scan_client", lambda src: client)
        return client

    return _install
