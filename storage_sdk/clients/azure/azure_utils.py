"""
Azure utilities for the storage-sdk.

This module provides the URL helpers used when building storage clients:
deriving service endpoints from an account name and decomposing SAS URLs
into account, container and signature query.
"""

from typing import Optional
from urllib.parse import urlsplit, urlunsplit

from pydantic import BaseModel, ConfigDict

from storage_sdk.common.error_codes import InvalidUrlError
from storage_sdk.constants import (
    AZURE_BLOB_SERVICE_DOMAIN,
    AZURE_BLOB_URL_TEMPLATE,
    AZURE_DATALAKE_SERVICE_DOMAIN,
)
from storage_sdk.observability.logger_adaptor import get_logger

logger = get_logger(__name__)

SUPPORTED_URL_SCHEMES = ("http", "https")


class SasComponents(BaseModel):
    """Structural components of a SAS URL.

    Attributes:
        account_name: First label of the URL host
        container_name: The single path segment, if the path has exactly one
        query: Raw query string including the leading '?', or '' if none
    """

    model_config = ConfigDict(frozen=True)

    account_name: str
    container_name: Optional[str] = None
    query: str = ""


def get_blob_service_url(account_name: str) -> str:
    """
    Get the blob service URL for a storage account.

    Args:
        account_name (str): Storage account name

    Returns:
        str: Service URL in the form https://{account_name}.blob.core.windows.net/
    """
    return AZURE_BLOB_URL_TEMPLATE.format(account_name=account_name)


def get_datalake_service_url(service_url: str) -> str:
    """
    Map a blob service URL onto the matching Data Lake (dfs) endpoint.

    URLs that do not use the public blob domain, such as custom endpoints,
    are returned unchanged.

    Args:
        service_url (str): Blob service URL, optionally carrying a SAS query

    Returns:
        str: The dfs endpoint URL with path and query preserved
    """
    parts = urlsplit(service_url)
    suffix = f".{AZURE_BLOB_SERVICE_DOMAIN}"
    if not parts.netloc.lower().endswith(suffix):
        return service_url

    netloc = parts.netloc[: -len(suffix)] + f".{AZURE_DATALAKE_SERVICE_DOMAIN}"
    return urlunsplit(parts._replace(netloc=netloc))


def redact_url(url: str) -> str:
    """
    Strip the query and fragment from a URL so it can be logged.

    Args:
        url (str): URL that may carry a SAS signature

    Returns:
        str: The URL without its query string and fragment
    """
    try:
        parts = urlsplit(url)
    except ValueError:
        return "<unparseable url>"
    return urlunsplit(parts._replace(query="", fragment=""))


def parse_sas_url(url: str) -> SasComponents:
    """
    Decompose a SAS URL into account name, container name and query.

    The URL is parsed structurally: the account name is the host label before
    the first '.', the container is set only when the path has exactly one
    non-root segment, and the query is kept raw and undecoded.

    Args:
        url (str): SAS URL, e.g. https://acct.blob.core.windows.net/container?sig=...

    Returns:
        SasComponents: The decomposed URL

    Raises:
        InvalidUrlError: If the URL cannot be parsed, uses an unsupported
            scheme, or its host has no dot-separated account label
    """
    try:
        return _decompose_sas_url(url)
    except InvalidUrlError as e:
        logger.error(f"Failed to parse SAS URL {e.url}: {e.reason}")
        raise


def try_parse_sas_url(url: str) -> Optional[SasComponents]:
    """
    Decompose a SAS URL, returning None instead of raising.

    Args:
        url (str): SAS URL

    Returns:
        Optional[SasComponents]: The decomposed URL, or None if it is invalid
    """
    try:
        return _decompose_sas_url(url)
    except InvalidUrlError:
        return None


def _decompose_sas_url(url: str) -> SasComponents:
    if not isinstance(url, str) or not url.strip():
        raise _invalid(str(url), "URL is empty")

    try:
        parts = urlsplit(url.strip())
        hostname = parts.hostname
    except ValueError as e:
        raise _invalid(url, f"Malformed URL: {str(e)}") from e

    if parts.scheme.lower() not in SUPPORTED_URL_SCHEMES:
        raise _invalid(url, f"Unsupported URL scheme: '{parts.scheme}'")

    if not hostname:
        raise _invalid(url, "URL has no host")

    account_name, dot, _ = hostname.partition(".")
    if not dot or not account_name:
        raise _invalid(url, f"Host '{hostname}' has no account label")

    return SasComponents(
        account_name=account_name,
        container_name=_single_path_segment(parts.path),
        query=f"?{parts.query}" if parts.query else "",
    )


def _single_path_segment(path: str) -> Optional[str]:
    segment = path[1:] if path.startswith("/") else path
    if segment.endswith("/"):
        segment = segment[:-1]
    if not segment or "/" in segment:
        return None
    return segment


def _invalid(url: str, reason: str) -> InvalidUrlError:
    logger.debug(f"Rejected SAS URL {redact_url(url)}: {reason}")
    return InvalidUrlError(redact_url(url), reason)
