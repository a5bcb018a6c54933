from __future__ import annotations

from typing import Any, Protocol
from urllib.parse import quote

import httpx

from atlassian_proxy.services.types import ContentDocument, Record, UpstreamError

SERVICE = "confluence"


class ConfluenceClient(Protocol):
    def search_content(self, cql: str, *, limit: int, start: int) -> Record: ...

    def get_page(self, page_id: str) -> ContentDocument: ...


class HttpConfluenceClient:
    def __init__(
        self,
        *,
        base_url: str,
        email: str,
        api_token: str,
        timeout_seconds: float = 30.0,
        verify_ssl: bool = True,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._auth = (email, api_token)
        self._timeout_seconds = timeout_seconds
        self._verify_ssl = verify_ssl

    def search_content(self, cql: str, *, limit: int, start: int) -> Record:
        return self._get(
            "content/search",
            context=cql,
            params={"cql": cql, "limit": limit, "start": start},
        )

    def get_page(self, page_id: str) -> ContentDocument:
        payload = self._get(
            f"content/{quote(page_id, safe='')}",
            context=page_id,
            params={"expand": "body.storage"},
        )

        title = payload.get("title")
        body = payload.get("body")
        storage = body.get("storage") if isinstance(body, dict) else None
        value = storage.get("value") if isinstance(storage, dict) else None
        if not isinstance(title, str) or not isinstance(value, str):
            raise UpstreamError(
                "Invalid content payload: missing title or body.storage.value",
                service=SERVICE,
                context=page_id,
            )

        return ContentDocument(title=title, raw_body=value)

    def _get(self, path: str, *, context: str, params: dict[str, Any]) -> Record:
        if not self._base_url:
            raise UpstreamError(
                "CONFLUENCE_URL is not configured", service=SERVICE, context=context
            )

        try:
            response = httpx.get(
                f"{self._base_url}/rest/api/{path}",
                params=params,
                auth=self._auth,
                headers={"Accept": "application/json"},
                timeout=self._timeout_seconds,
                verify=self._verify_ssl,
            )
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise UpstreamError(str(exc), service=SERVICE, context=context) from exc

        if not isinstance(payload, dict):
            raise UpstreamError(
                "Invalid payload: expected a JSON object", service=SERVICE, context=context
            )
        return payload
