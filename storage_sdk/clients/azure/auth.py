"""
Azure authentication provider for the storage-sdk.

This module provides the AzureAuthProvider class that turns a named
authentication mode and its parameters into a credential object the Azure
Storage SDK can authenticate with.

Example:
    >>> from storage_sdk.clients.azure.auth import AuthMode, AzureAuthProvider
    >>> from storage_sdk.common.error_codes import MissingParameterError
    >>>
    >>> auth_provider = AzureAuthProvider()
    >>>
    >>> # Shared key
    >>> credential = auth_provider.create_credential(
    ...     AuthMode.SHARED_KEY,
    ...     {"account_name": "myaccount", "account_key": "bXlrZXk="},
    ... )
    >>>
    >>> # Azure AD application, default authority
    >>> credential = auth_provider.create_credential(
    ...     AuthMode.AZURE_AD,
    ...     {
    ...         "account_name": "myaccount",
    ...         "tenant_id": "your-tenant-id",
    ...         "application_id": "your-application-id",
    ...         "application_secret": "your-application-secret",
    ...     },
    ... )
    >>>
    >>> # Managed identity, optionally selecting a user-assigned identity
    >>> credential = auth_provider.create_credential(
    ...     AuthMode.MANAGED_IDENTITY,
    ...     {"account_name": "myaccount", "client_id": "identity-client-id"},
    ... )
    >>>
    >>> # Missing parameters are reported all at once
    >>> try:
    ...     auth_provider.create_credential(AuthMode.SHARED_KEY, {"account_name": "a"})
    ... except MissingParameterError as e:
    ...     print(e.parameters)
    ['account_key']
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from azure.core.credentials import AzureNamedKeyCredential
from azure.identity import ClientSecretCredential, ManagedIdentityCredential
from pydantic import BaseModel, ConfigDict

from storage_sdk.common.error_codes import ClientError, MissingParameterError
from storage_sdk.constants import AZURE_AD_DEFAULT_AUTHORITY
from storage_sdk.observability.logger_adaptor import get_logger

logger = get_logger(__name__)


class AuthMode(str, Enum):
    """Authentication modes a storage handle can be built with."""

    SHARED_KEY = "shared_key"
    AZURE_AD = "azure_ad"
    MANAGED_IDENTITY = "managed_identity"
    SAS = "sas"


# camelCase spellings accepted alongside the snake_case parameter names
PARAMETER_ALIASES = {
    "account_name": "accountName",
    "account_key": "accountKey",
    "tenant_id": "tenantId",
    "application_id": "applicationId",
    "application_secret": "applicationSecret",
    "client_id": "clientId",
}


class StorageCredential(BaseModel):
    """Resolved credential tagged with the mode that produced it.

    Attributes:
        auth_mode: The authentication mode the credential was resolved for
        account_name: Storage account the credential authenticates against
        credential: The Azure SDK credential object
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    auth_mode: AuthMode
    account_name: str
    credential: Any


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


class AzureAuthProvider:
    """
    Azure authentication provider for storage credentials.

    A single resolver that dispatches on AuthMode. Every required parameter is
    validated before any SDK credential is constructed, and no network call is
    made while resolving: token acquisition happens later, inside the SDK,
    when the resulting client is used.

    Supported authentication modes:
    - shared_key: account name and account key
    - azure_ad: tenant ID, application ID and application secret
    - managed_identity: optional client ID of a user-assigned identity
    """

    def create_credential(
        self,
        auth_type: Union[AuthMode, str],
        credentials: Optional[Dict[str, Any]] = None,
    ) -> StorageCredential:
        """
        Create a storage credential for the given authentication mode.

        Args:
            auth_type (Union[AuthMode, str]): Authentication mode to resolve.
            credentials (Optional[Dict[str, Any]]): Parameters for the mode.
                snake_case and camelCase keys are both accepted.

        Returns:
            StorageCredential: The resolved credential.

        Raises:
            MissingParameterError: If a required parameter is absent or empty.
            ClientError: If the authentication mode cannot be resolved.
        """
        auth_mode = self._parse_auth_mode(auth_type)
        params = self._normalize(credentials or {})

        logger.debug(f"Creating Azure storage credential with auth mode: {auth_mode.value}")

        if auth_mode == AuthMode.SHARED_KEY:
            return self._create_shared_key_credential(params)
        if auth_mode == AuthMode.AZURE_AD:
            return self._create_azure_ad_credential(params)
        if auth_mode == AuthMode.MANAGED_IDENTITY:
            return self._create_managed_identity_credential(params)

        # SAS URLs carry their signature in the query string and are passed to
        # the client directly
        logger.error(f"Auth mode {auth_mode.value} has no separate credential")
        raise ClientError(
            ClientError.UNSUPPORTED_AUTH_MODE_ERROR,
            f"'{auth_mode.value}' is used as a URL, not resolved to a credential. "
            f"Supported: {', '.join(self.get_supported_auth_types())}",
        )

    def get_supported_auth_types(self) -> List[str]:
        """
        Get list of authentication modes this provider can resolve.

        Returns:
            List[str]: Supported authentication modes.
        """
        return [
            AuthMode.SHARED_KEY.value,
            AuthMode.AZURE_AD.value,
            AuthMode.MANAGED_IDENTITY.value,
        ]

    def _parse_auth_mode(self, auth_type: Union[AuthMode, str]) -> AuthMode:
        if isinstance(auth_type, AuthMode):
            return auth_type
        try:
            return AuthMode(str(auth_type).lower())
        except ValueError:
            logger.error(f"Unknown auth mode: {auth_type}")
            raise ClientError(
                ClientError.UNSUPPORTED_AUTH_MODE_ERROR,
                f"Received: {auth_type}. "
                f"Supported: {', '.join(self.get_supported_auth_types())}",
            )

    @staticmethod
    def _normalize(credentials: Dict[str, Any]) -> Dict[str, Any]:
        params = dict(credentials)
        for name, alias in PARAMETER_ALIASES.items():
            if params.get(name) is None and alias in params:
                params[name] = params.pop(alias)
        return params

    @staticmethod
    def _require(params: Dict[str, Any], *names: str) -> None:
        missing = [name for name in names if _is_missing(params.get(name))]
        if missing:
            logger.error(f"Missing required credential parameters: {', '.join(missing)}")
            raise MissingParameterError(missing)

    def _create_shared_key_credential(
        self, params: Dict[str, Any]
    ) -> StorageCredential:
        self._require(params, "account_name", "account_key")

        account_name = str(params["account_name"])
        return StorageCredential(
            auth_mode=AuthMode.SHARED_KEY,
            account_name=account_name,
            credential=AzureNamedKeyCredential(account_name, str(params["account_key"])),
        )

    def _create_azure_ad_credential(self, params: Dict[str, Any]) -> StorageCredential:
        if params.get("authority") is None:
            params["authority"] = AZURE_AD_DEFAULT_AUTHORITY

        self._require(
            params,
            "account_name",
            "tenant_id",
            "application_id",
            "application_secret",
            "authority",
        )

        logger.debug(
            f"Creating Azure AD credential for tenant {params['tenant_id']} "
            f"against {params['authority']}"
        )

        return StorageCredential(
            auth_mode=AuthMode.AZURE_AD,
            account_name=str(params["account_name"]),
            credential=ClientSecretCredential(
                str(params["tenant_id"]),
                str(params["application_id"]),
                str(params["application_secret"]),
                authority=str(params["authority"]),
            ),
        )

    def _create_managed_identity_credential(
        self, params: Dict[str, Any]
    ) -> StorageCredential:
        self._require(params, "account_name")

        client_id = params.get("client_id") or None
        if client_id:
            logger.debug(f"Using user-assigned managed identity {client_id}")

        return StorageCredential(
            auth_mode=AuthMode.MANAGED_IDENTITY,
            account_name=str(params["account_name"]),
            credential=ManagedIdentityCredential(client_id=client_id),
        )
