from abc import ABC, abstractmethod
from typing import Any, Optional


class BlobStorageInterface(ABC):
    """Base interface for flat blob storage handles.

    This abstract class defines what every storage handle exposes to callers:
    the account and container context it was built for and the underlying
    service client that performs the actual network operations.
    """

    @property
    @abstractmethod
    def account_name(self) -> str:
        """Name of the storage account the handle is bound to."""

    @property
    @abstractmethod
    def container_name(self) -> Optional[str]:
        """Container the handle is scoped to, if any."""

    @property
    @abstractmethod
    def service_url(self) -> str:
        """Service locator the underlying client was built against."""

    @property
    @abstractmethod
    def blob_service_client(self) -> Any:
        """The underlying blob service client."""


class DataLakeStorageInterface(BlobStorageInterface):
    """Interface for hierarchical namespace (Data Lake Gen2) storage handles.

    Widens the blob contract with access to a data lake service client for
    the same account and credential.
    """

    @property
    @abstractmethod
    def data_lake_service_client(self) -> Any:
        """The data lake service client for the same account."""
