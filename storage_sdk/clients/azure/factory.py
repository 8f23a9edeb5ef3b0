"""
Factory for creating Azure storage handles.

Every entry point is stateless: all configuration is passed explicitly, each
call resolves a fresh credential and builds a fresh handle, and nothing is
cached between calls.

Example:
    >>> from storage_sdk.clients.azure.factory import AzureStorageFactory
    >>>
    >>> storage = AzureStorageFactory.blob_with_shared_key("myaccount", "bXlrZXk=")
    >>> storage = AzureStorageFactory.blob_with_sas(
    ...     "https://myaccount.blob.core.windows.net/reports?sv=2021-08-06&sig=..."
    ... )
    >>> storage.container_name
    'reports'
    >>>
    >>> # Hierarchical namespace view of the same account
    >>> lake = AzureStorageFactory.data_lake_with_managed_identity("myaccount")
    >>> file_system = lake.data_lake_service_client.get_file_system_client("raw")
    >>>
    >>> AzureStorageFactory.connection_string_for_shared_key("myaccount", "bXlrZXk=")
    'azure.blob://account=myaccount;key=bXlrZXk='
"""

from typing import Optional

from storage_sdk.clients import BlobStorageInterface, DataLakeStorageInterface
from storage_sdk.clients.azure.auth import AuthMode, AzureAuthProvider
from storage_sdk.clients.azure.azure_utils import get_blob_service_url, parse_sas_url
from storage_sdk.clients.azure.client import AzureBlobStorage
from storage_sdk.clients.azure.connection_string import StorageConnectionString
from storage_sdk.common.error_codes import ClientError, MissingParameterError
from storage_sdk.constants import AZURE_AD_DEFAULT_AUTHORITY
from storage_sdk.observability.logger_adaptor import get_logger

logger = get_logger(__name__)


class AzureStorageFactory:
    """Factory for Azure Blob and Data Lake storage handles."""

    @staticmethod
    def blob_with_shared_key(
        account_name: str,
        key: str,
        service_url: Optional[str] = None,
    ) -> AzureBlobStorage:
        """
        Create blob storage authenticated with the account's shared key.

        Args:
            account_name (str): Storage account name
            key (str): Storage account key
            service_url (Optional[str]): Explicit service URL, used verbatim.
                Derived from the account name when not given.

        Returns:
            AzureBlobStorage: The storage handle

        Raises:
            MissingParameterError: If the account name or key is missing
        """
        credential = AzureAuthProvider().create_credential(
            AuthMode.SHARED_KEY,
            {"account_name": account_name, "account_key": key},
        )

        return AzureBlobStorage.create(
            service_url=service_url or get_blob_service_url(account_name),
            account_name=account_name,
            credential=credential,
        )

    @staticmethod
    def blob_with_azure_ad(
        account_name: str,
        tenant_id: str,
        application_id: str,
        application_secret: str,
        authority: str = AZURE_AD_DEFAULT_AUTHORITY,
    ) -> AzureBlobStorage:
        """
        Create blob storage authenticated with an Azure AD application.

        Args:
            account_name (str): Storage account name
            tenant_id (str): Azure AD tenant ID
            application_id (str): Application (client) ID
            application_secret (str): Application secret
            authority (str): Azure AD authority host

        Returns:
            AzureBlobStorage: The storage handle

        Raises:
            MissingParameterError: If any required parameter is missing
        """
        credential = AzureAuthProvider().create_credential(
            AuthMode.AZURE_AD,
            {
                "account_name": account_name,
                "tenant_id": tenant_id,
                "application_id": application_id,
                "application_secret": application_secret,
                "authority": authority,
            },
        )

        return AzureBlobStorage.create(
            service_url=get_blob_service_url(account_name),
            account_name=account_name,
            credential=credential,
        )

    @staticmethod
    def blob_with_sas(sas_url: str) -> AzureBlobStorage:
        """
        Create blob storage from a SAS URL.

        The URL is both the service locator and the credential. The account
        name and, for container-level SAS URLs, the container name are taken
        from the URL itself.

        Args:
            sas_url (str): SAS URL for the account or a container

        Returns:
            AzureBlobStorage: The storage handle

        Raises:
            MissingParameterError: If the URL is missing
            InvalidUrlError: If the URL cannot be decomposed
        """
        if sas_url is None or not str(sas_url).strip():
            logger.error("Missing required parameter: sas_url")
            raise MissingParameterError(["sas_url"])

        sas_url = str(sas_url).strip()
        components = parse_sas_url(sas_url)

        return AzureBlobStorage.create(
            service_url=sas_url,
            account_name=components.account_name,
            container_name=components.container_name,
            auth_mode=AuthMode.SAS,
        )

    @staticmethod
    def blob_with_managed_identity(
        account_name: str,
        client_id: Optional[str] = None,
    ) -> AzureBlobStorage:
        """
        Create blob storage authenticated with a managed identity.

        Token acquisition failures surface only when the handle is used.

        Args:
            account_name (str): Storage account name
            client_id (Optional[str]): Client ID of a user-assigned identity

        Returns:
            AzureBlobStorage: The storage handle

        Raises:
            MissingParameterError: If the account name is missing
        """
        credential = AzureAuthProvider().create_credential(
            AuthMode.MANAGED_IDENTITY,
            {"account_name": account_name, "client_id": client_id},
        )

        return AzureBlobStorage.create(
            service_url=get_blob_service_url(account_name),
            account_name=account_name,
            credential=credential,
        )

    @staticmethod
    def as_data_lake(storage: BlobStorageInterface) -> DataLakeStorageInterface:
        """
        View a storage handle through the data lake interface.

        The same object is returned; nothing is rebuilt or re-resolved.

        Args:
            storage (BlobStorageInterface): Handle from any blob entry point

        Returns:
            DataLakeStorageInterface: The same handle

        Raises:
            ClientError: If the handle does not implement the data lake interface
        """
        if not isinstance(storage, DataLakeStorageInterface):
            logger.error(f"{type(storage).__name__} does not support the data lake view")
            raise ClientError(
                ClientError.CAPABILITY_ERROR,
                f"{type(storage).__name__} does not implement DataLakeStorageInterface",
            )
        return storage

    @classmethod
    def data_lake_with_shared_key(
        cls,
        account_name: str,
        key: str,
        service_url: Optional[str] = None,
    ) -> DataLakeStorageInterface:
        """Create data lake storage authenticated with the account's shared key."""
        return cls.as_data_lake(cls.blob_with_shared_key(account_name, key, service_url))

    @classmethod
    def data_lake_with_azure_ad(
        cls,
        account_name: str,
        tenant_id: str,
        application_id: str,
        application_secret: str,
        authority: str = AZURE_AD_DEFAULT_AUTHORITY,
    ) -> DataLakeStorageInterface:
        """Create data lake storage authenticated with an Azure AD application."""
        return cls.as_data_lake(
            cls.blob_with_azure_ad(
                account_name, tenant_id, application_id, application_secret, authority
            )
        )

    @classmethod
    def data_lake_with_sas(cls, sas_url: str) -> DataLakeStorageInterface:
        """Create data lake storage from a SAS URL."""
        return cls.as_data_lake(cls.blob_with_sas(sas_url))

    @classmethod
    def data_lake_with_managed_identity(
        cls,
        account_name: str,
        client_id: Optional[str] = None,
    ) -> DataLakeStorageInterface:
        """Create data lake storage authenticated with a managed identity."""
        return cls.as_data_lake(cls.blob_with_managed_identity(account_name, client_id))

    @staticmethod
    def connection_string_for_shared_key(account_name: str, account_key: str) -> str:
        """
        Build a connection string for shared key access.

        Args:
            account_name (str): Storage account name
            account_key (str): Storage account key

        Returns:
            str: e.g. azure.blob://account=myaccount;key=bXlrZXk=
        """
        return str(StorageConnectionString.for_shared_key(account_name, account_key))

    @classmethod
    def from_connection_string(cls, connection_string: str) -> AzureBlobStorage:
        """
        Create blob storage from a connection string of the known shape.

        Args:
            connection_string (str): e.g. azure.blob://account=myaccount;key=bXlrZXk=

        Returns:
            AzureBlobStorage: The storage handle

        Raises:
            InvalidConnectionStringError: If the connection string is malformed
        """
        parsed = StorageConnectionString.parse(connection_string)
        return cls.blob_with_shared_key(parsed.account_name, parsed.account_key)


blob_with_shared_key = AzureStorageFactory.blob_with_shared_key
blob_with_azure_ad = AzureStorageFactory.blob_with_azure_ad
blob_with_sas = AzureStorageFactory.blob_with_sas
blob_with_managed_identity = AzureStorageFactory.blob_with_managed_identity
data_lake_with_shared_key = AzureStorageFactory.data_lake_with_shared_key
data_lake_with_azure_ad = AzureStorageFactory.data_lake_with_azure_ad
data_lake_with_sas = AzureStorageFactory.data_lake_with_sas
data_lake_with_managed_identity = AzureStorageFactory.data_lake_with_managed_identity
as_data_lake = AzureStorageFactory.as_data_lake
connection_string_for_shared_key = AzureStorageFactory.connection_string_for_shared_key
from_connection_string = AzureStorageFactory.from_connection_string
