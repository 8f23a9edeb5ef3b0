import os

from dotenv import load_dotenv

load_dotenv(dotenv_path=".env")

# Logger Constants
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
SERVICE_NAME: str = os.getenv("OTEL_SERVICE_NAME", "storage-sdk")

# Azure Storage Constants
AZURE_BLOB_SERVICE_DOMAIN = "blob.core.windows.net"
AZURE_DATALAKE_SERVICE_DOMAIN = "dfs.core.windows.net"
AZURE_BLOB_URL_TEMPLATE = "https://{account_name}." + AZURE_BLOB_SERVICE_DOMAIN + "/"

# Azure AD Constants
AZURE_AD_DEFAULT_AUTHORITY = "https://login.microsoftonline.com/"

# Connection String Constants
CONNECTION_STRING_PREFIX = "azure.blob"
CONNECTION_STRING_SCHEME_SEPARATOR = "://"
CONNECTION_STRING_PARAMETER_SEPARATOR = ";"
CONNECTION_STRING_VALUE_SEPARATOR = "="
CONNECTION_STRING_ACCOUNT_NAME = "account"
CONNECTION_STRING_KEY_OR_PASSWORD = "key"
