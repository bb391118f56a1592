"""HTTP access to a Strapi instance's content-type-builder and i18n APIs."""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Literal, Optional

import httpx
from pydantic import BaseModel, ValidationError

from strapigen.core.errors import SchemaFetchError
from strapigen.schema.raw import RawComponent, RawContentType, RawLocale, RawSchema

log = logging.getLogger(__name__)

StrapiVersion = Literal["v4", "v5"]


@dataclass(frozen=True)
class VersionDetectionResult:
    detected: Optional[StrapiVersion]
    message: str


@dataclass(frozen=True)
class ConnectionResult:
    success: bool
    message: str


def _is_user_content_type(uid: str) -> bool:
    return uid.startswith("api::") and "strapi::" not in uid and "admin::" not in uid


def _items(payload: Any) -> list[Any]:
    if isinstance(payload, dict):
        payload = payload.get("data")
    return payload if isinstance(payload, list) else []


def _validate_items(model: type[BaseModel], payload: Any, what: str) -> list[Any]:
    valid = []
    for index, item in enumerate(_items(payload)):
        try:
            valid.append(model.model_validate(item))
        except ValidationError as e:
            log.warning("Skipping malformed %s entry #%d: %s", what, index, e.errors()[0]["msg"])
    return valid


@dataclass
class StrapiSchemaClient:
    base_url: str
    token: Optional[str] = None
    api_prefix: str = "/api"
    timeout: float = 30.0
    transport: Optional[httpx.AsyncBaseTransport] = None

    def _headers(self) -> dict:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def url(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}{self.api_prefix}{path}"

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, headers=self._headers(), transport=self.transport)

    async def _get_json(self, client: httpx.AsyncClient, path: str, what: str, params: dict | None = None) -> Any:
        url = self.url(path)
        try:
            r = await client.get(url, params=params)
        except httpx.HTTPError as e:
            raise SchemaFetchError(f"Failed to fetch {what}: {e}", url=url) from e
        if r.is_error:
            raise SchemaFetchError(
                f"Failed to fetch {what}: {r.status_code} {r.text}",
                status_code=r.status_code,
                body=r.text,
                url=url,
            )
        try:
            return r.json()
        except ValueError as e:
            raise SchemaFetchError(
                f"Failed to fetch {what}: response is not JSON",
                status_code=r.status_code,
                body=r.text,
                url=url,
            ) from e

    async def fetch_content_types(self, client: httpx.AsyncClient) -> list[RawContentType]:
        payload = await self._get_json(client, "/content-type-builder/content-types", "content types")
        content_types = _validate_items(RawContentType, payload, "content type")
        return [ct for ct in content_types if _is_user_content_type(ct.uid)]

    async def fetch_components(self, client: httpx.AsyncClient) -> list[RawComponent]:
        payload = await self._get_json(client, "/content-type-builder/components", "components")
        return _validate_items(RawComponent, payload, "component")

    async def fetch_locales(self, client: httpx.AsyncClient) -> list[RawLocale]:
        # i18n may be disabled; no locales then
        try:
            payload = await self._get_json(client, "/i18n/locales", "locales")
        except SchemaFetchError as e:
            log.debug("Locales unavailable: %s", e.message)
            return []
        return _validate_items(RawLocale, payload, "locale")

    async def fetch_schema(self) -> RawSchema:
        async with self._client() as client:
            results = await asyncio.gather(
                self.fetch_content_types(client),
                self.fetch_components(client),
                self.fetch_locales(client),
                return_exceptions=True,
            )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        content_types, components, locales = results
        log.info(
            "Fetched %d content types, %d components, %d locales",
            len(content_types), len(components), len(locales),
        )
        return RawSchema(content_types=content_types, components=components, locales=locales)

    async def detect_version(self, schema: RawSchema | None = None) -> VersionDetectionResult:
        """
        Probe the entries of the first user collection.

        A ``documentId`` on the entry means v5, an ``attributes`` wrapper
        means v4. Any failure yields ``detected=None``.
        """
        try:
            async with self._client() as client:
                if schema is None:
                    content_types = await self.fetch_content_types(client)
                else:
                    content_types = schema.content_types
                endpoint = _first_collection_endpoint(content_types)
                if endpoint is None:
                    return VersionDetectionResult(None, "No collection types to probe")
                payload = await self._get_json(
                    client, f"/{endpoint}", "entries", params={"pagination[pageSize]": 1}
                )
        except SchemaFetchError as e:
            return VersionDetectionResult(None, f"Could not detect version: {e.message}")

        entries = _items(payload)
        if not entries:
            return VersionDetectionResult(None, f"No entries in '{endpoint}' to detect version from")
        entry = entries[0]
        if isinstance(entry, dict) and "documentId" in entry:
            return VersionDetectionResult("v5", "Detected Strapi v5 (documentId present)")
        if isinstance(entry, dict) and isinstance(entry.get("attributes"), dict):
            return VersionDetectionResult("v4", "Detected Strapi v4 (attributes wrapper present)")
        return VersionDetectionResult(None, "Entry shape matches neither v4 nor v5")

    async def test_connection(self) -> ConnectionResult:
        try:
            async with self._client() as client:
                r = await client.get(self.url("/content-type-builder/content-types"))
        except httpx.HTTPError as e:
            return ConnectionResult(False, str(e) or "Connection failed")

        if r.is_success:
            return ConnectionResult(True, "Connected successfully")
        if r.status_code == 401:
            return ConnectionResult(False, "Invalid or missing API token")
        if r.status_code == 403:
            return ConnectionResult(False, "API token does not have permission to access content-type-builder")
        return ConnectionResult(False, f"Failed to connect: {r.status_code} {r.reason_phrase}")


def _first_collection_endpoint(content_types: list[RawContentType]) -> str | None:
    for ct in content_types:
        definition = {**ct.extras(), **ct.definition}
        info = definition.get("info") if isinstance(definition.get("info"), dict) else {}
        if definition.get("kind") != "collectionType":
            continue
        plural = definition.get("pluralName") or info.get("pluralName")
        if isinstance(plural, str) and plural:
            return plural
    return None


def fetch_schema(
    base_url: str,
    token: str | None = None,
    api_prefix: str = "/api",
    transport: httpx.AsyncBaseTransport | None = None,
) -> RawSchema:
    """
    Fetch content types, components and locales.

    Raises:
        SchemaFetchError: If the content-types or components endpoint fails
    """
    client = StrapiSchemaClient(base_url, token, api_prefix, transport=transport)
    return asyncio.run(client.fetch_schema())


def detect_version(
    base_url: str,
    token: str | None = None,
    api_prefix: str = "/api",
    schema: RawSchema | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> VersionDetectionResult:
    client = StrapiSchemaClient(base_url, token, api_prefix, transport=transport)
    return asyncio.run(client.detect_version(schema))


def test_connection(
    base_url: str,
    token: str | None = None,
    api_prefix: str = "/api",
    transport: httpx.AsyncBaseTransport | None = None,
) -> ConnectionResult:
    client = StrapiSchemaClient(base_url, token, api_prefix, transport=transport)
    return asyncio.run(client.test_connection())

