"""Tests for the data profile scan creation tool."""

import json

import pytest
from google.api_core.exceptions import (
    AlreadyExists,
    DeadlineExceeded,
    FailedPrecondition,
    RetryError,
)

from conftest import PROJECT, FakeDataScanClient, make_data_scan, tool_fn
from src.core.dataplex import DataScanToolError
from src.tools.datascans import profile

CREATED_NAME = f"projects/{PROJECT}/locations/us-central1/dataScans/orders-scan"


def _request(**kwargs):
    params = dict(project=PROJECT, location="us-central1", dataset="sales", table="orders")
    params.update(kwargs)
    return profile.build_create_request(**params)


class TestBuildCreateRequest:
    def test_builds_on_demand_profile_scan(self) -> None:
        request = _request(data_scan_id="orders-scan", sampling_percent=25.0)

        assert request.parent == f"projects/{PROJECT}/locations/us-central1"
        assert request.data_scan_id == "orders-scan"
        scan = request.data_scan
        assert scan.display_name == "Profile of sales.orders"
        assert scan.data.resource == (
            f"//bigquery.googleapis.com/projects/{PROJECT}/datasets/sales/tables/orders"
        )
        assert "on_demand" in scan.execution_spec.trigger
        assert scan.data_profile_spec.sampling_percent == 25.0

    def test_generates_scan_id(self) -> None:
        request = _request(table="Orders_2024")
        assert request.data_scan_id.startswith("profile-orders-2024-")

    def test_custom_display_name(self) -> None:
        assert _request(display_name="Nightly").data_scan.display_name == "Nightly"

    @pytest.mark.parametrize("percent", [0, -1, 100.5])
    def test_rejects_sampling_percent(self, percent: float) -> None:
        with pytest.raises(ValueError, match="sampling_percent"):
            _request(sampling_percent=percent)

    def test_requires_table(self) -> None:
        with pytest.raises(ValueError, match="table is required"):
            _request(table=" ")


class TestCreateProfileScan:
    def test_creates_and_runs(self) -> None:
        client = FakeDataScanClient(
            created=make_data_scan(name=CREATED_NAME, display_name="Profile of sales.orders"),
            job_name=f"{CREATED_NAME}/jobs/job-1",
        )
        request = _request(data_scan_id="orders-scan")

        result = profile.create_profile_scan(client, request, PROJECT, timeout=42)

        assert result.data_scan_name == CREATED_NAME
        assert result.state == "ACTIVE"
        assert result.sampling_percent == 10.0
        assert result.job_name == f"{CREATED_NAME}/jobs/job-1"
        assert client.operation.timeout == 42
        assert client.requests[1].name == CREATED_NAME

    def test_without_run(self) -> None:
        client = FakeDataScanClient(created=make_data_scan(name=CREATED_NAME))

        result = profile.create_profile_scan(client, _request(), PROJECT, timeout=1, run_now=False)

        assert result.job_name is None
        assert len(client.requests) == 1

    def test_create_failure(self) -> None:
        client = FakeDataScanClient(error=AlreadyExists("DataScan orders-scan already exists"))

        with pytest.raises(DataScanToolError) as excinfo:
            profile.create_profile_scan(client, _request(), PROJECT, timeout=1)
        assert str(excinfo.value) == (
            f'failed to create data scan for project "{PROJECT}": '
            "DataScan orders-scan already exists"
        )

    def test_run_failure(self) -> None:
        client = FakeDataScanClient(
            created=make_data_scan(name=CREATED_NAME),
            run_error=FailedPrecondition("scan is still being created"),
        )

        with pytest.raises(DataScanToolError, match=f"failed to run data scan {CREATED_NAME}"):
            profile.create_profile_scan(client, _request(), PROJECT, timeout=1)


class TestCreateDataProfileScanTool:
    def test_uses_source_defaults(self, use_fake_client, source) -> None:
        client = use_fake_client(
            profile,
            FakeDataScanClient(
                created=make_data_scan(name=CREATED_NAME), job_name=f"{CREATED_NAME}/jobs/j"
            ),
        )

        output = json.loads(
            tool_fn(profile.create_data_profile_scan)("sales", "orders", data_scan_id="orders-scan")
        )

        assert output["data_scan_name"] == CREATED_NAME
        assert output["job_name"] == f"{CREATED_NAME}/jobs/j"
        assert client.requests[0].parent == f"projects/{PROJECT}/locations/us-central1"
        assert client.operation.timeout == source.operation_timeout

    def test_invalid_input_returns_error(self, use_fake_client) -> None:
        client = use_fake_client(profile, FakeDataScanClient())

        output = json.loads(
            tool_fn(profile.create_data_profile_scan)("sales", "orders", sampling_percent=0)
        )

        assert output["_error"] is True
        assert "sampling_percent" in output["message"]
        assert client.requests == []


class TestCreateDataProfileScanErrors:
    def test_location_required(self, use_fake_client, source) -> None:
        source.location = None
        client = use_fake_client(profile, FakeDataScanClient())

        output = json.loads(tool_fn(profile.create_data_profile_scan)("sales", "orders"))

        assert output == {"_error": True, "message": "location parameter is required"}
        assert client.requests == []

    def test_unexpected_error_is_returned(self, monkeypatch, source) -> None:
        def broken_client(src):
            raise RuntimeError("transport closed")

        monkeypatch.setattr(profile, "get_source", lambda: source)
        monkeypatch.setattr(profile, "get_data_scan_client", broken_client)

        output = json.loads(
            tool_fn(profile.create_data_profile_scan)("sales", "orders", location="l")
        )

        assert output == {"_error": True, "message": "transport closed"}

    def test_operation_timeout_is_wrapped(self) -> None:
        client = FakeDataScanClient(
            error=RetryError("Timeout of 30.0s exceeded", DeadlineExceeded("deadline"))
        )

        with pytest.raises(DataScanToolError) as excinfo:
            profile.create_profile_scan(client, _request(), PROJECT, timeout=30)
        assert str(excinfo.value).startswith(f'failed to create data scan for project "{PROJECT}": ')
        assert "Timeout of 30.0s exceeded" in str(excinfo.value)
