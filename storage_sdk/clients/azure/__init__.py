"""
Azure storage client module for the storage-sdk.

This module builds authenticated Azure Blob Storage handles and their
Data Lake Storage Gen2 views from one of several credential schemes.

The module includes:
- AzureStorageFactory: Entry points for every authentication mode
- AzureAuthProvider: Resolves an authentication mode into a credential
- AzureBlobStorage: The storage handle returned by the factory
- StorageConnectionString: Connection strings of the azure.blob shape
- Utilities: Service URL derivation and SAS URL decomposition
"""

from .auth import AuthMode, AzureAuthProvider, StorageCredential
from .azure_utils import (
    SasComponents,
    get_blob_service_url,
    get_datalake_service_url,
    parse_sas_url,
    try_parse_sas_url,
)
from .client import AzureBlobStorage
from .connection_string import StorageConnectionString
from .factory import (
    AzureStorageFactory,
    as_data_lake,
    blob_with_azure_ad,
    blob_with_managed_identity,
    blob_with_sas,
    blob_with_shared_key,
    connection_string_for_shared_key,
    data_lake_with_azure_ad,
    data_lake_with_managed_identity,
    data_lake_with_sas,
    data_lake_with_shared_key,
    from_connection_string,
)

__all__ = [
    # Factory
    "AzureStorageFactory",
    "blob_with_shared_key",
    "blob_with_azure_ad",
    "blob_with_sas",
    "blob_with_managed_identity",
    "data_lake_with_shared_key",
    "data_lake_with_azure_ad",
    "data_lake_with_sas",
    "data_lake_with_managed_identity",
    "as_data_lake",
    "connection_string_for_shared_key",
    "from_connection_string",
    # Authentication
    "AuthMode",
    "AzureAuthProvider",
    "StorageCredential",
    # Storage handle
    "AzureBlobStorage",
    "StorageConnectionString",
    # Utilities
    "SasComponents",
    "get_blob_service_url",
    "get_datalake_service_url",
    "parse_sas_url",
    "try_parse_sas_url",
]
