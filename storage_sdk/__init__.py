"""Factory layer for authenticated Azure Blob and Data Lake storage clients."""

__version__ = "0.1.0"
