"""Unit tests for the Azure storage factory."""

from unittest.mock import patch

import pytest
from hypothesis import given

from storage_sdk.clients import BlobStorageInterface, DataLakeStorageInterface
from storage_sdk.clients.azure import factory as factory_module
from storage_sdk.clients.azure.auth import AuthMode
from storage_sdk.clients.azure.client import AzureBlobStorage
from storage_sdk.clients.azure.factory import AzureStorageFactory
from storage_sdk.common.error_codes import (
    ClientError,
    InvalidConnectionStringError,
    InvalidUrlError,
    MissingParameterError,
)
from storage_sdk.constants import AZURE_AD_DEFAULT_AUTHORITY
from storage_sdk.test_utils.hypothesis.strategies.clients.azure import (
    account_key_strategy,
    account_name_strategy,
)

TENANT_ID = "00000000-0000-0000-0000-000000000001"
APPLICATION_ID = "00000000-0000-0000-0000-000000000002"
SAS_URL = "https://acct1.blob.core.windows.net/container1?sv=2021-08-06&sig=abc"


def build_all():
    """Build one handle per construction path."""
    return {
        "shared_key": lambda: AzureStorageFactory.blob_with_shared_key("acct1", "bXlrZXk="),
        "azure_ad": lambda: AzureStorageFactory.blob_with_azure_ad(
            "acct1", TENANT_ID, APPLICATION_ID, "secret"
        ),
        "sas": lambda: AzureStorageFactory.blob_with_sas(SAS_URL),
        "managed_identity": lambda: AzureStorageFactory.blob_with_managed_identity(
            "acct1"
        ),
    }


class TestBlobWithSharedKey:
    """Test cases for shared key construction."""

    def test_derived_service_url(self):
        """Test that the service URL is derived from the account name."""
        storage = AzureStorageFactory.blob_with_shared_key("acct1", "bXlrZXk=")

        assert isinstance(storage, AzureBlobStorage)
        assert storage.service_url == "https://acct1.blob.core.windows.net/"
        assert storage.account_name == "acct1"
        assert storage.container_name is None
        assert storage.auth_mode == AuthMode.SHARED_KEY

    def test_explicit_service_url_used_verbatim(self):
        """Test that an explicit service URL skips derivation."""
        service_url = "http://127.0.0.1:10000/devstoreaccount1"

        with patch.object(factory_module, "get_blob_service_url") as mock_derive:
            storage = AzureStorageFactory.blob_with_shared_key(
                "devstoreaccount1", "bXlrZXk=", service_url
            )

        assert storage.service_url == service_url
        mock_derive.assert_not_called()

    @pytest.mark.parametrize(
        "account_name,key,missing",
        [(None, "bXlrZXk=", "account_name"), ("acct1", None, "account_key"), ("", "k", "account_name")],
    )
    def test_missing_parameter(self, account_name, key, missing):
        """Test that missing shared key parameters fail before any client is built."""
        with patch(
            "storage_sdk.clients.azure.client.BlobServiceClient"
        ) as mock_client_cls:
            with pytest.raises(MissingParameterError) as exc_info:
                AzureStorageFactory.blob_with_shared_key(account_name, key)

        assert exc_info.value.parameters == [missing]
        mock_client_cls.assert_not_called()


class TestBlobWithAzureAd:
    """Test cases for Azure AD application construction."""

    def test_default_authority(self, mock_client_secret_credential):
        """Test construction with the default authority."""
        storage = AzureStorageFactory.blob_with_azure_ad(
            "acct1", TENANT_ID, APPLICATION_ID, "secret"
        )

        assert storage.auth_mode == AuthMode.AZURE_AD
        assert storage.service_url == "https://acct1.blob.core.windows.net/"
        assert storage.credential.credential is mock_client_secret_credential.return_value
        mock_client_secret_credential.assert_called_once_with(
            TENANT_ID, APPLICATION_ID, "secret", authority=AZURE_AD_DEFAULT_AUTHORITY
        )

    @pytest.mark.parametrize(
        "position,missing",
        [(0, "account_name"), (1, "tenant_id"), (2, "application_id"), (3, "application_secret")],
    )
    def test_missing_parameter(self, mock_client_secret_credential, position, missing):
        """Test that every required Azure AD argument is validated."""
        args = ["acct1", TENANT_ID, APPLICATION_ID, "secret"]
        args[position] = None

        with pytest.raises(MissingParameterError) as exc_info:
            AzureStorageFactory.blob_with_azure_ad(*args)

        assert exc_info.value.parameters == [missing]
        mock_client_secret_credential.assert_not_called()


class TestBlobWithSas:
    """Test cases for SAS URL construction."""

    def test_container_sas(self):
        """Test that account and container come from the URL."""
        storage = AzureStorageFactory.blob_with_sas(SAS_URL)

        assert storage.auth_mode == AuthMode.SAS
        assert storage.account_name == "acct1"
        assert storage.container_name == "container1"
        assert storage.service_url == SAS_URL
        assert storage.credential is None

    def test_account_sas(self):
        """Test that an account-level SAS URL has no container."""
        storage = AzureStorageFactory.blob_with_sas(
            "https://acct1.blob.core.windows.net/?sv=2021-08-06&sig=abc"
        )

        assert storage.container_name is None

    def test_surrounding_whitespace_stripped(self):
        """Test that the URL handed to the SDK carries no surrounding whitespace."""
        with patch(
            "storage_sdk.clients.azure.client.BlobServiceClient"
        ) as mock_client_cls:
            storage = AzureStorageFactory.blob_with_sas(f"  {SAS_URL}\n")

        assert storage.service_url == SAS_URL
        mock_client_cls.assert_called_once_with(account_url=SAS_URL, credential=None)

    @pytest.mark.parametrize("sas_url", [None, "", "  "])
    def test_missing_url(self, sas_url):
        """Test that an absent SAS URL is a missing parameter."""
        with pytest.raises(MissingParameterError) as exc_info:
            AzureStorageFactory.blob_with_sas(sas_url)

        assert exc_info.value.parameters == ["sas_url"]

    @pytest.mark.parametrize("sas_url", ["not a url", "https://localhost/c1?sig=abc"])
    def test_invalid_url(self, sas_url):
        """Test that an undecomposable URL fails before any client is built."""
        with patch(
            "storage_sdk.clients.azure.client.BlobServiceClient"
        ) as mock_client_cls:
            with pytest.raises(InvalidUrlError):
                AzureStorageFactory.blob_with_sas(sas_url)

        mock_client_cls.assert_not_called()


class TestBlobWithManagedIdentity:
    """Test cases for managed identity construction."""

    def test_system_assigned(self, mock_managed_identity_credential):
        """Test construction without a client ID."""
        storage = AzureStorageFactory.blob_with_managed_identity("acct1")

        assert storage.auth_mode == AuthMode.MANAGED_IDENTITY
        assert storage.service_url == "https://acct1.blob.core.windows.net/"
        mock_managed_identity_credential.assert_called_once_with(client_id=None)

    def test_user_assigned(self, mock_managed_identity_credential):
        """Test that the client ID is passed to the identity credential."""
        AzureStorageFactory.blob_with_managed_identity("acct1", "identity-client-id")

        mock_managed_identity_credential.assert_called_once_with(
            client_id="identity-client-id"
        )

    def test_missing_account(self, mock_managed_identity_credential):
        """Test that the account name is still required."""
        with pytest.raises(MissingParameterError):
            AzureStorageFactory.blob_with_managed_identity(None)

        mock_managed_identity_credential.assert_not_called()


class TestAsDataLake:
    """Test cases for the data lake view."""

    @pytest.mark.parametrize("path", ["shared_key", "azure_ad", "sas", "managed_identity"])
    def test_same_handle_returned(self, path):
        """Test that the data lake view is the same handle for every path."""
        storage = build_all()[path]()

        with patch.object(
            factory_module.AzureAuthProvider, "create_credential"
        ) as mock_resolve, patch(
            "storage_sdk.clients.azure.client.BlobServiceClient"
        ) as mock_client_cls:
            lake = AzureStorageFactory.as_data_lake(storage)

        assert lake is storage
        assert isinstance(lake, DataLakeStorageInterface)
        assert lake.account_name == storage.account_name
        assert lake.container_name == storage.container_name
        mock_resolve.assert_not_called()
        mock_client_cls.assert_not_called()

    def test_blob_only_handle_rejected(self):
        """Test that a handle without the data lake contract is rejected."""

        class BlobOnlyStorage(BlobStorageInterface):
            account_name = "acct1"
            container_name = None
            service_url = "https://acct1.blob.core.windows.net/"
            blob_service_client = None

        with pytest.raises(ClientError) as exc_info:
            AzureStorageFactory.as_data_lake(BlobOnlyStorage())

        assert exc_info.value.error_code == ClientError.CAPABILITY_ERROR

    def test_data_lake_with_shared_key(self):
        """Test the data lake shared key entry point."""
        lake = AzureStorageFactory.data_lake_with_shared_key("acct1", "bXlrZXk=")

        assert isinstance(lake, DataLakeStorageInterface)
        assert lake.service_url == "https://acct1.blob.core.windows.net/"

    def test_data_lake_with_azure_ad(self, mock_client_secret_credential):
        """Test the data lake Azure AD entry point."""
        lake = AzureStorageFactory.data_lake_with_azure_ad(
            "acct1", TENANT_ID, APPLICATION_ID, "secret", "https://login.microsoftonline.us/"
        )

        assert isinstance(lake, DataLakeStorageInterface)
        assert (
            mock_client_secret_credential.call_args.kwargs["authority"]
            == "https://login.microsoftonline.us/"
        )

    def test_data_lake_with_sas(self):
        """Test the data lake SAS entry point keeps the container."""
        lake = AzureStorageFactory.data_lake_with_sas(SAS_URL)

        assert isinstance(lake, DataLakeStorageInterface)
        assert lake.container_name == "container1"

    def test_data_lake_with_managed_identity(self, mock_managed_identity_credential):
        """Test the data lake managed identity entry point."""
        lake = AzureStorageFactory.data_lake_with_managed_identity("acct1", "cid")

        assert isinstance(lake, DataLakeStorageInterface)
        mock_managed_identity_credential.assert_called_once_with(client_id="cid")

    def test_data_lake_missing_parameter(self):
        """Test that the data lake entry points validate like the blob ones."""
        with pytest.raises(MissingParameterError):
            AzureStorageFactory.data_lake_with_shared_key("acct1", None)


class TestIndependentHandles:
    """Test that repeated construction yields independent handles."""

    @pytest.mark.parametrize("path", ["shared_key", "azure_ad", "sas", "managed_identity"])
    def test_identical_inputs_give_independent_handles(self, path):
        """Test that two calls share configuration but no state."""
        first = build_all()[path]()
        second = build_all()[path]()

        assert first is not second
        assert first.blob_service_client is not second.blob_service_client
        assert first.account_name == second.account_name
        assert first.container_name == second.container_name
        assert first.service_url == second.service_url
        assert first.auth_mode == second.auth_mode


class TestConnectionStrings:
    """Test cases for connection string entry points."""

    def test_connection_string_for_shared_key(self):
        """Test the textual connection string."""
        assert (
            AzureStorageFactory.connection_string_for_shared_key("myacct", "mykey")
            == "azure.blob://account=myacct;key=mykey"
        )

    @given(account_name=account_name_strategy, account_key=account_key_strategy)
    def test_connection_string_builds_matching_handle(self, account_name, account_key):
        """Test that a built connection string yields the same shared key handle."""
        connection_string = AzureStorageFactory.connection_string_for_shared_key(
            account_name, account_key
        )

        storage = AzureStorageFactory.from_connection_string(connection_string)

        assert storage.account_name == account_name
        assert storage.auth_mode == AuthMode.SHARED_KEY
        assert storage.credential.credential.named_key.key == account_key

    def test_from_invalid_connection_string(self):
        """Test that a malformed connection string is rejected."""
        with pytest.raises(InvalidConnectionStringError):
            AzureStorageFactory.from_connection_string("azure.blob://account=a")


class TestModuleAliases:
    """Test the module-level entry points."""

    def test_aliases_match_factory(self):
        """Test that the module functions are the factory's methods."""
        assert factory_module.blob_with_sas is AzureStorageFactory.blob_with_sas
        assert (
            factory_module.data_lake_with_shared_key
            == AzureStorageFactory.data_lake_with_shared_key
        )

    def test_alias_builds_handle(self):
        """Test building a handle through a module function."""
        storage = factory_module.blob_with_sas(SAS_URL)

        assert storage.container_name == "container1"
