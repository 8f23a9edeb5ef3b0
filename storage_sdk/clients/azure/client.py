"""
Azure Blob Storage handle for the storage-sdk.

This module provides the AzureBlobStorage class, the handle returned by every
factory entry point. It wraps a single BlobServiceClient together with the
account and container context callers need, and exposes the same object
through both the blob and the data lake (hierarchical namespace) interfaces.

Example:
    >>> from storage_sdk.clients.azure.auth import AuthMode, AzureAuthProvider
    >>> from storage_sdk.clients.azure.azure_utils import get_blob_service_url
    >>> from storage_sdk.clients.azure.client import AzureBlobStorage
    >>>
    >>> credential = AzureAuthProvider().create_credential(
    ...     AuthMode.SHARED_KEY,
    ...     {"account_name": "myaccount", "account_key": "bXlrZXk="},
    ... )
    >>> storage = AzureBlobStorage.create(
    ...     service_url=get_blob_service_url("myaccount"),
    ...     credential=credential,
    ...     account_name="myaccount",
    ... )
    >>> storage.service_url
    'https://myaccount.blob.core.windows.net/'
    >>>
    >>> # Operations go straight to the Azure SDK
    >>> container = storage.get_container_client("reports")
"""

from typing import Any, Optional

from azure.storage.blob import BlobServiceClient, ContainerClient
from azure.storage.filedatalake import DataLakeServiceClient

from storage_sdk.clients import DataLakeStorageInterface
from storage_sdk.clients.azure.auth import AuthMode, StorageCredential
from storage_sdk.clients.azure.azure_utils import get_datalake_service_url, redact_url
from storage_sdk.common.error_codes import ClientError
from storage_sdk.observability.logger_adaptor import get_logger

logger = get_logger(__name__)


class AzureBlobStorage(DataLakeStorageInterface):
    """
    Storage handle backed by an Azure BlobServiceClient.

    The handle is fixed for its lifetime: the credential, service URL, account
    and container cannot be changed after construction. Network operations are
    performed by the wrapped SDK client and its errors propagate unchanged.

    Attributes:
        _blob_service_client (BlobServiceClient): The wrapped SDK client
        _account_name (str): Storage account name
        _container_name (Optional[str]): Container the handle is scoped to
        _service_url (str): Service locator the client was built against
        _credential (Optional[StorageCredential]): Resolved credential, None for SAS
        _auth_mode (AuthMode): Authentication mode used to build the handle
        _data_lake_service_client (Optional[DataLakeServiceClient]): Created on first use
    """

    def __init__(
        self,
        blob_service_client: BlobServiceClient,
        account_name: str,
        service_url: str,
        auth_mode: AuthMode,
        credential: Optional[StorageCredential] = None,
        container_name: Optional[str] = None,
    ):
        self._blob_service_client = blob_service_client
        self._account_name = account_name
        self._service_url = service_url
        self._auth_mode = auth_mode
        self._credential = credential
        self._container_name = container_name
        self._data_lake_service_client: Optional[DataLakeServiceClient] = None

    @classmethod
    def create(
        cls,
        service_url: str,
        account_name: str,
        credential: Optional[StorageCredential] = None,
        container_name: Optional[str] = None,
        auth_mode: Optional[AuthMode] = None,
    ) -> "AzureBlobStorage":
        """
        Build a storage handle for a service URL.

        With a credential the URL is the account's service root. Without one,
        the URL is a SAS URL that carries its own signature and is handed to
        the SDK as is.

        Args:
            service_url (str): Service locator, or the full SAS URL
            account_name (str): Storage account name
            credential (Optional[StorageCredential]): Resolved credential
            container_name (Optional[str]): Container the handle is scoped to
            auth_mode (Optional[AuthMode]): Defaults to the credential's mode,
                or SAS when no credential is given

        Returns:
            AzureBlobStorage: The storage handle
        """
        if auth_mode is None:
            auth_mode = credential.auth_mode if credential else AuthMode.SAS

        blob_service_client = BlobServiceClient(
            account_url=service_url,
            credential=credential.credential if credential else None,
        )

        logger.info(
            f"Created Azure blob storage handle for account {account_name} "
            f"({auth_mode.value}) at {redact_url(service_url)}"
        )

        return cls(
            blob_service_client=blob_service_client,
            account_name=account_name,
            service_url=service_url,
            auth_mode=auth_mode,
            credential=credential,
            container_name=container_name,
        )

    @property
    def account_name(self) -> str:
        return self._account_name

    @property
    def container_name(self) -> Optional[str]:
        return self._container_name

    @property
    def service_url(self) -> str:
        return self._service_url

    @property
    def auth_mode(self) -> AuthMode:
        return self._auth_mode

    @property
    def credential(self) -> Optional[StorageCredential]:
        return self._credential

    @property
    def blob_service_client(self) -> BlobServiceClient:
        return self._blob_service_client

    @property
    def data_lake_service_client(self) -> DataLakeServiceClient:
        """
        Data lake service client for the same account and credential.

        Created on first access against the account's dfs endpoint. No network
        call is made until an operation is invoked on it.
        """
        if self._data_lake_service_client is None:
            self._data_lake_service_client = DataLakeServiceClient(
                account_url=get_datalake_service_url(self._service_url),
                credential=self._credential.credential if self._credential else None,
            )
        return self._data_lake_service_client

    def get_container_client(self, container_name: Optional[str] = None) -> ContainerClient:
        """
        Get a container client from the wrapped service client.

        Args:
            container_name (Optional[str]): Container to address. Defaults to
                the container the handle is scoped to.

        Returns:
            ContainerClient: The SDK container client.

        Raises:
            ClientError: If no container name is given and none is bound.
        """
        name = container_name or self._container_name
        if not name:
            raise ClientError(
                ClientError.CONTAINER_NOT_BOUND_ERROR,
                f"Handle for account {self._account_name} is not scoped to a container",
            )
        return self._blob_service_client.get_container_client(name)

    def close(self) -> None:
        """Close the wrapped SDK clients and release their transports."""
        self._blob_service_client.close()
        if self._data_lake_service_client is not None:
            self._data_lake_service_client.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()

    def __repr__(self) -> str:
        return (
            f"AzureBlobStorage(account_name={self._account_name!r}, "
            f"container_name={self._container_name!r}, "
            f"auth_mode={self._auth_mode.value!r})"
        )
