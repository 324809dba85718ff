"""
Signed URL issuance for blobs in a single Azure Storage container.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any
from urllib.parse import quote, urlsplit, urlunsplit
import uuid

from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.routing import APIRoute
from loguru import logger
from pydantic import BaseModel, field_validator

from sasurl.core.config import Settings
from sasurl.core.durations import DurationLike, parse_ttl
from sasurl.core.error_codes import ErrorCode
from sasurl.core.errors import ConfigurationError, InvalidArgumentError
from sasurl.services.signer import AzureBlobSigner, BlobSigner, StorageCredentials, coerce_credentials

CDN_DOMAIN_SUFFIX = "azureedge.net"
DEFAULT_MOUNT_PATH = "/static"
# Characters encodeURIComponent leaves as-is beyond the ones quote() always keeps.
SAFE_NAME_CHARS = "!'()*"


class Permission(str, Enum):
    READ = "read"
    WRITE = "write"


def normalize_mount_path(path: str | None) -> str:
    value = str(path or "").strip().rstrip("/")
    if value and not value.startswith("/"):
        value = f"/{value}"
    return value


class IssuerConfig(BaseModel):
    """Immutable issuer configuration. Use `with_mount_path` to move the redirect route."""

    container: str
    read_ttl: timedelta
    write_ttl: timedelta
    mount_path: str = DEFAULT_MOUNT_PATH
    cdn_endpoint_name: str | None = None

    model_config = {"frozen": True}

    @field_validator("mount_path", mode="before")
    @classmethod
    def _normalize_mount_path(cls, value: Any) -> str:
        return normalize_mount_path(value)

    @property
    def read_ttl_seconds(self) -> int:
        return int(self.read_ttl.total_seconds())

    @property
    def cache_control_header(self) -> str:
        return f"public, max-age={self.read_ttl_seconds}"

    def ttl_for(self, permission: Permission) -> timedelta:
        return self.read_ttl if permission is Permission.READ else self.write_ttl

    def with_mount_path(self, mount_path: str) -> "IssuerConfig":
        return type(self)(**self.model_dump(exclude={"mount_path"}), mount_path=mount_path)


class WriteUrl(BaseModel):
    name: str
    url: str


class CacheControlRoute(APIRoute):
    """Route class that stamps a fixed Cache-Control header on every response."""

    cache_control: str = ""

    def get_route_handler(self) -> Callable:
        handler = super().get_route_handler()
        cache_control = self.cache_control

        async def route_handler(request: Request) -> Response:
            response = await handler(request)
            if cache_control:
                response.headers["Cache-Control"] = cache_control
            return response

        return route_handler


class SignedUrlIssuer:
    """Issues read/write SAS URLs and serves a local redirect to fresh read URLs."""

    def __init__(
        self,
        *,
        container: str,
        read_ttl: DurationLike,
        write_ttl: DurationLike,
        mount_path: str = DEFAULT_MOUNT_PATH,
        cdn_endpoint_name: str | None = None,
        credentials: StorageCredentials | Mapping[str, Any] | None = None,
        signer: BlobSigner | None = None,
        blob_endpoint: str | None = None,
    ) -> None:
        creds = coerce_credentials(credentials)

        if not str(container or "").strip():
            raise ConfigurationError("A storage container must be configured")

        self.config = IssuerConfig(
            container=container,
            read_ttl=parse_ttl(read_ttl, field="read_ttl"),
            write_ttl=parse_ttl(write_ttl, field="write_ttl"),
            mount_path=mount_path,
            cdn_endpoint_name=cdn_endpoint_name or None,
        )
        self._signer = signer or AzureBlobSigner(creds, blob_endpoint=blob_endpoint)

        logger.info(
            "SAS URL issuer ready for {}/{} (read ttl {}s, write ttl {}s, cdn {})",
            creds.account_name,
            self.config.container,
            self.config.read_ttl_seconds,
            int(self.config.write_ttl.total_seconds()),
            self.config.cdn_endpoint_name or "-",
        )

    @classmethod
    def from_settings(cls, settings: Settings, **overrides: Any) -> "SignedUrlIssuer":
        kwargs: dict[str, Any] = {
            "container": settings.sas_container,
            "read_ttl": settings.sas_read_ttl,
            "write_ttl": settings.sas_write_ttl,
            "mount_path": settings.sas_mount_path,
            "cdn_endpoint_name": settings.sas_cdn_endpoint_name or None,
            "credentials": settings.storage_credentials(),
            "blob_endpoint": settings.azure_storage_blob_endpoint or None,
        }
        kwargs.update(overrides)
        return cls(**kwargs)

    @property
    def mount_path(self) -> str:
        return self.config.mount_path

    def issue_url(self, *, permission: Permission | str, name: str | None = None) -> str:
        try:
            permission = Permission(permission)
        except ValueError as exc:
            raise InvalidArgumentError("Invalid permission") from exc

        if not name:
            raise InvalidArgumentError("Name must be provided")

        name = str(name).lstrip("/")
        if not name:
            raise InvalidArgumentError("Name must not be only slashes")

        container = self.config.container
        expiry = datetime.now(timezone.utc) + self.config.ttl_for(permission)

        token = self._signer.sign(container, name, permission.value, expiry)
        url = self._signer.url_for(container, name, token)

        if permission is Permission.READ and self.config.cdn_endpoint_name:
            url = self._cdn_url(url)

        logger.debug("Issued {} URL for {}/{} expiring {}", permission.value, container, name, expiry.isoformat())
        return url

    def _cdn_url(self, url: str) -> str:
        parts = urlsplit(url)
        host = f"{self.config.cdn_endpoint_name}.{CDN_DOMAIN_SUFFIX}"
        if parts.port:
            host = f"{host}:{parts.port}"
        return urlunsplit(parts._replace(netloc=host))

    def issue_read_url(self, name: str | None) -> str | None:
        if not name:
            return None
        return self.issue_url(permission=Permission.READ, name=name)

    def issue_write_batch(self, count: int, extension: str | None = None) -> list[WriteUrl]:
        """
        Generate `count` fresh blob names and a write URL for each.

        Names are UUID4 strings, suffixed with ".<extension>" when one is given.
        """
        if isinstance(count, bool) or not isinstance(count, int):
            raise InvalidArgumentError("Count must be an integer")
        if count < 0:
            raise InvalidArgumentError("Count must not be negative")

        suffix = str(extension or "").strip().lstrip(".")

        items: list[WriteUrl] = []
        for _ in range(count):
            name = f"{uuid.uuid4()}.{suffix}" if suffix else str(uuid.uuid4())
            items.append(WriteUrl(name=name, url=self.issue_url(permission=Permission.WRITE, name=name)))
        return items

    def local_read_path(self, name: str | None) -> str | None:
        if not name:
            return None
        return f"{self.config.mount_path}/{quote(name, safe=SAFE_NAME_CHARS)}"

    def install_redirect_route(self, mount_path: str | None = None) -> APIRouter:
        """
        Build a router answering GET and HEAD on `<mount_path>/<name>` with a 302 to a fresh read URL.

        Every response from the router carries `Cache-Control: public, max-age=<read ttl>`.
        """
        if mount_path is not None:
            self.config = self.config.with_mount_path(mount_path)

        route_class = type(
            f"CacheControlRoute_{id(self)}",
            (CacheControlRoute,),
            {"cache_control": self.config.cache_control_header},
        )
        router = APIRouter(route_class=route_class, tags=["blobs"])

        @router.api_route(f"{self.config.mount_path}/{{name:path}}", methods=["GET", "HEAD"], include_in_schema=False)
        def redirect_to_blob(name: str) -> Response:
            try:
                url = self.issue_read_url(name)
            except InvalidArgumentError:
                url = None
            if not url:
                return JSONResponse(
                    status_code=404,
                    content={"error": {"code": ErrorCode.BLOB_NOT_FOUND, "message": "Blob name must be provided"}},
                )
            return RedirectResponse(url, status_code=302)

        logger.info("Redirect route installed at {}/{{name}}", self.config.mount_path)
        return router
