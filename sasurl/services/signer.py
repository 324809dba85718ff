"""
Shared access signature backends.

Signing is a local HMAC over the account key; nothing here talks to the network.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any, Protocol
from urllib.parse import quote

from azure.storage.blob import BlobSasPermissions, generate_blob_sas
from pydantic import BaseModel

from sasurl.core.errors import ConfigurationError


class StorageCredentials(BaseModel):
    account_name: str
    account_key: str

    model_config = {"frozen": True}


def coerce_credentials(value: StorageCredentials | Mapping[str, Any] | None) -> StorageCredentials:
    if not value:
        raise ConfigurationError("Azure Storage credentials must be provided")

    if isinstance(value, StorageCredentials):
        account_name, account_key = value.account_name, value.account_key
    else:
        account_name = value.get("account_name")
        account_key = value.get("account_key")

    if not account_name or not account_key:
        raise ConfigurationError("credentials must have `account_name` and `account_key` attributes")

    return StorageCredentials(account_name=str(account_name), account_key=str(account_key))


class BlobSigner(Protocol):
    def sign(self, container: str, name: str, permission: str, expiry: datetime) -> str: ...

    def url_for(self, container: str, name: str, token: str) -> str: ...


class AzureBlobSigner:
    """Blob-scoped SAS tokens via azure-storage-blob."""

    def __init__(self, credentials: StorageCredentials, blob_endpoint: str | None = None) -> None:
        self._credentials = credentials
        endpoint = (blob_endpoint or "").strip().rstrip("/")
        self._endpoint = endpoint or f"https://{credentials.account_name}.blob.core.windows.net"

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def sign(self, container: str, name: str, permission: str, expiry: datetime) -> str:
        if permission == "read":
            permissions = BlobSasPermissions(read=True)
        elif permission == "write":
            permissions = BlobSasPermissions(write=True)
        else:
            raise ValueError(f"Unsupported permission: {permission}")

        return generate_blob_sas(
            account_name=self._credentials.account_name,
            container_name=container,
            blob_name=name,
            account_key=self._credentials.account_key,
            permission=permissions,
            expiry=expiry,
        )

    def url_for(self, container: str, name: str, token: str) -> str:
        url = f"{self._endpoint}/{quote(container)}/{quote(name, safe='~/')}"
        return f"{url}?{token}" if token else url
