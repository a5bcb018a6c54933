from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol
from urllib.parse import quote

import httpx

from atlassian_proxy.services.types import Record, ResultPage, UpstreamError

SERVICE = "jira"


class JiraClient(Protocol):
    def search_issues(
        self,
        jql: str,
        *,
        fields: Sequence[str],
        max_results: int,
        start_at: int,
    ) -> ResultPage: ...

    def find_issue(self, key: str) -> Record: ...


class HttpJiraClient:
    def __init__(
        self,
        *,
        base_url: str,
        email: str,
        api_token: str,
        api_version: str = "2",
        timeout_seconds: float = 30.0,
        verify_ssl: bool = True,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._auth = (email, api_token)
        self._api_version = api_version
        self._timeout_seconds = timeout_seconds
        self._verify_ssl = verify_ssl

    def search_issues(
        self,
        jql: str,
        *,
        fields: Sequence[str],
        max_results: int,
        start_at: int,
    ) -> ResultPage:
        payload = self._request(
            "POST",
            "search",
            context=jql,
            json={
                "jql": jql,
                "startAt": start_at,
                "maxResults": max_results,
                "fields": list(fields),
            },
        )

        issues = payload.get("issues")
        if not isinstance(issues, list):
            raise UpstreamError(
                "Invalid search payload: missing issues", service=SERVICE, context=jql
            )

        total = payload.get("total")
        is_last = not isinstance(total, int) or start_at + len(issues) >= total
        return ResultPage(items=issues, is_last=is_last)

    def find_issue(self, key: str) -> Record:
        return self._request("GET", f"issue/{quote(key, safe='')}", context=key)

    def _request(self, method: str, path: str, *, context: str, **kwargs: Any) -> Record:
        if not self._base_url:
            raise UpstreamError("JIRA_URL is not configured", service=SERVICE, context=context)

        url = f"{self._base_url}/rest/api/{self._api_version}/{path}"
        options: dict[str, Any] = {
            "auth": self._auth,
            "headers": {"Accept": "application/json"},
            "timeout": self._timeout_seconds,
            "verify": self._verify_ssl,
            **kwargs,
        }
        try:
            if method == "POST":
                response = httpx.post(url, **options)
            else:
                response = httpx.get(url, **options)
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise UpstreamError(str(exc), service=SERVICE, context=context) from exc

        if not isinstance(payload, dict):
            raise UpstreamError(
                "Invalid payload: expected a JSON object", service=SERVICE, context=context
            )
        return payload
