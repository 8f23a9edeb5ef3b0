"""Global test configuration and fixtures."""

from unittest.mock import MagicMock, patch

import pytest


@pytest.fixture(autouse=True)
def mock_client_secret_credential():
    """Automatically mock ClientSecretCredential so tests never reach Azure AD."""
    with patch(
        "storage_sdk.clients.azure.auth.ClientSecretCredential"
    ) as mock_credential_cls:
        mock_credential_cls.return_value = MagicMock(
            spec=["get_token", "close"], name="ClientSecretCredential"
        )
        yield mock_credential_cls


@pytest.fixture(autouse=True)
def mock_managed_identity_credential():
    """Automatically mock ManagedIdentityCredential so tests never probe the host."""
    with patch(
        "storage_sdk.clients.azure.auth.ManagedIdentityCredential"
    ) as mock_credential_cls:
        mock_credential_cls.return_value = MagicMock(
            spec=["get_token", "close"], name="ManagedIdentityCredential"
        )
        yield mock_credential_cls
