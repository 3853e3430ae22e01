"""BigQuery source: project defaults and Dataplex client construction."""

import logging
from typing import Callable, Optional, Tuple

from google.cloud import dataplex_v1
from google.oauth2.credentials import Credentials

logger = logging.getLogger(__name__)

ClientCreator = Callable[[str], dataplex_v1.DataScanServiceClient]


def create_client_from_token(token: str) -> dataplex_v1.DataScanServiceClient:
    """Build a DataScan client that acts as the holder of an OAuth access token."""
    return dataplex_v1.DataScanServiceClient(credentials=Credentials(token=token))


class BigQuerySource:
    """Connection settings shared by every data scan tool."""

    def __init__(
        self,
        project: str,
        location: Optional[str] = None,
        use_client_authorization: bool = False,
        operation_timeout: float = 300,
    ):
        self.project = project
        self.location = location
        self.client_authorization = use_client_authorization
        self.operation_timeout = operation_timeout
        self._client: Optional[dataplex_v1.DataScanServiceClient] = None

    def bigquery_project(self) -> str:
        return self.project

    def use_client_authorization(self) -> bool:
        return self.client_authorization

    def make_data_scan_client(
        self,
    ) -> Tuple[Optional[dataplex_v1.DataScanServiceClient], ClientCreator]:
        """
        Get the default client and a factory for per-caller clients.

        The default client uses application default credentials and is built
        once. With client authorization enabled no ambient credentials are
        used, so the default client is None.
        """
        if self.client_authorization:
            return None, create_client_from_token

        if self._client is None:
            logger.info("Creating Dataplex DataScan client with default credentials")
            self._client = dataplex_v1.DataScanServiceClient()
        return self._client, create_client_from_token
