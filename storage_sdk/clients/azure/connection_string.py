"""
Connection strings for Azure Blob Storage.

A connection string has one known shape: the ``azure.blob`` prefix followed
by ``://`` and ``;``-separated ``name=value`` pairs drawn from a closed
vocabulary (account name and key), in that order::

    azure.blob://account=myaccount;key=bXlrZXk=
"""

from typing import Any, Dict, Mapping, Tuple

from pydantic import BaseModel, ConfigDict, field_validator

from storage_sdk.common.error_codes import InvalidConnectionStringError
from storage_sdk.constants import (
    CONNECTION_STRING_ACCOUNT_NAME,
    CONNECTION_STRING_KEY_OR_PASSWORD,
    CONNECTION_STRING_PARAMETER_SEPARATOR,
    CONNECTION_STRING_PREFIX,
    CONNECTION_STRING_SCHEME_SEPARATOR,
    CONNECTION_STRING_VALUE_SEPARATOR,
)
from storage_sdk.observability.logger_adaptor import get_logger

logger = get_logger(__name__)

KNOWN_PARAMETERS = (CONNECTION_STRING_ACCOUNT_NAME, CONNECTION_STRING_KEY_OR_PASSWORD)


class StorageConnectionString(BaseModel):
    """Connection string with a fixed prefix and ordered known parameters.

    Instances are immutable, so the vocabulary check made at construction
    holds for their whole lifetime.

    Attributes:
        prefix: Scheme token identifying the storage implementation
        parameters: Ordered (name, value) pairs of known parameters. A mapping
            is accepted on construction.
    """

    model_config = ConfigDict(frozen=True)

    prefix: str = CONNECTION_STRING_PREFIX
    parameters: Tuple[Tuple[str, str], ...] = ()

    @field_validator("parameters", mode="before")
    @classmethod
    def mapping_to_pairs(cls, value: Any) -> Any:
        if isinstance(value, Mapping):
            return tuple(value.items())
        return value

    @field_validator("parameters")
    @classmethod
    def check_known_parameters(
        cls, value: Tuple[Tuple[str, str], ...]
    ) -> Tuple[Tuple[str, str], ...]:
        unknown = [name for name, _ in value if name not in KNOWN_PARAMETERS]
        if unknown:
            raise ValueError(f"Unknown connection string parameters: {', '.join(unknown)}")
        return value

    @property
    def account_name(self) -> str:
        return dict(self.parameters).get(CONNECTION_STRING_ACCOUNT_NAME, "")

    @property
    def account_key(self) -> str:
        return dict(self.parameters).get(CONNECTION_STRING_KEY_OR_PASSWORD, "")

    @classmethod
    def for_shared_key(cls, account_name: str, account_key: str) -> "StorageConnectionString":
        """
        Build a connection string for shared key access.

        Args:
            account_name (str): Storage account name
            account_key (str): Storage account key

        Returns:
            StorageConnectionString: Connection string with account and key
        """
        return cls(
            parameters={
                CONNECTION_STRING_ACCOUNT_NAME: account_name,
                CONNECTION_STRING_KEY_OR_PASSWORD: account_key,
            }
        )

    @classmethod
    def parse(cls, text: str) -> "StorageConnectionString":
        """
        Parse a connection string of the known shape.

        Values are split on the first '=' only, so base64 padding in keys is
        preserved.

        Args:
            text (str): Connection string, e.g. azure.blob://account=a;key=k

        Returns:
            StorageConnectionString: The parsed connection string

        Raises:
            InvalidConnectionStringError: If the prefix is unknown, a pair is
                malformed, a parameter is unknown or repeated, or the account
                or key is missing
        """
        head = f"{CONNECTION_STRING_PREFIX}{CONNECTION_STRING_SCHEME_SEPARATOR}"
        if not isinstance(text, str) or not text.startswith(head):
            raise _invalid(f"Connection string must start with '{head}'")

        parameters: Dict[str, str] = {}
        body = text[len(head) :]
        for pair in body.split(CONNECTION_STRING_PARAMETER_SEPARATOR):
            if not pair:
                continue
            name, separator, value = pair.partition(CONNECTION_STRING_VALUE_SEPARATOR)
            if not separator:
                raise _invalid(f"Expected name=value, got '{name}'")
            if name not in KNOWN_PARAMETERS:
                raise _invalid(f"Unknown parameter '{name}'")
            if name in parameters:
                raise _invalid(f"Parameter '{name}' is repeated")
            parameters[name] = value

        missing = [name for name in KNOWN_PARAMETERS if not parameters.get(name)]
        if missing:
            raise _invalid(f"Missing parameters: {', '.join(missing)}")

        # keep the canonical order regardless of input order
        return cls(parameters={name: parameters[name] for name in KNOWN_PARAMETERS})

    def __str__(self) -> str:
        pairs = CONNECTION_STRING_PARAMETER_SEPARATOR.join(
            f"{name}{CONNECTION_STRING_VALUE_SEPARATOR}{value}"
            for name, value in self.parameters
        )
        return f"{self.prefix}{CONNECTION_STRING_SCHEME_SEPARATOR}{pairs}"

    def __repr__(self) -> str:
        return f"StorageConnectionString(prefix={self.prefix!r}, account_name={self.account_name!r})"


def _invalid(reason: str) -> InvalidConnectionStringError:
    logger.error(f"Failed to parse connection string: {reason}")
    return InvalidConnectionStringError(reason)
