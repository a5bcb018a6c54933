from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from atlassian_proxy.config import get_settings
from atlassian_proxy.main import app


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Iterator[None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def client(monkeypatch: pytest.MonkeyPatch) -> Iterator[TestClient]:
    monkeypatch.setenv("JIRA_URL", "https://example.atlassian.net")
    monkeypatch.setenv("JIRA_EMAIL", "bot@example.com")
    monkeypatch.setenv("JIRA_API_TOKEN", "jira-token")
    monkeypatch.setenv("CONFLUENCE_URL", "https://example.atlassian.net/wiki")
    monkeypatch.setenv("CONFLUENCE_EMAIL", "bot@example.com")
    monkeypatch.setenv("CONFLUENCE_API_TOKEN", "confluence-token")
    monkeypatch.delenv("JIRA_SEARCH_PAGE_SIZE", raising=False)
    monkeypatch.delenv("JIRA_SEARCH_MAX_PAGES", raising=False)
    monkeypatch.delenv("CONFLUENCE_SEARCH_LIMIT", raising=False)

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
