from dataclasses import dataclass
from functools import lru_cache
import os

from dotenv import load_dotenv


def _to_bool(value: str | None, *, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _to_int(value: str | None, *, default: int, minimum: int) -> int:
    if value is None:
        return default
    parsed = int(value)
    return max(minimum, parsed)


def _to_fields(value: str | None, *, default: tuple[str, ...]) -> tuple[str, ...]:
    if value is None:
        return default
    fields = tuple(field.strip() for field in value.split(",") if field.strip())
    return fields or default


def _to_base_url(value: str | None) -> str:
    if not value:
        return ""
    url = value.strip().rstrip("/")
    if url and "://" not in url:
        url = f"https://{url}"
    return url


@dataclass(frozen=True)
class Settings:
    jira_url: str
    jira_email: str
    jira_api_token: str
    jira_api_version: str
    jira_search_fields: tuple[str, ...]
    jira_search_page_size: int
    jira_search_max_pages: int
    confluence_url: str
    confluence_email: str
    confluence_api_token: str
    confluence_search_limit: int
    http_timeout_seconds: float
    http_verify_ssl: bool
    port: int
    log_level: str


@lru_cache
def get_settings() -> Settings:
    load_dotenv()
    return Settings(
        jira_url=_to_base_url(os.getenv("JIRA_URL")),
        jira_email=os.getenv("JIRA_EMAIL", ""),
        jira_api_token=os.getenv("JIRA_API_TOKEN", ""),
        jira_api_version=os.getenv("JIRA_API_VERSION", "2"),
        jira_search_fields=_to_fields(
            os.getenv("JIRA_SEARCH_FIELDS"),
            default=("summary", "description", "assignee", "status"),
        ),
        jira_search_page_size=_to_int(
            os.getenv("JIRA_SEARCH_PAGE_SIZE"), default=10, minimum=1
        ),
        jira_search_max_pages=_to_int(
            os.getenv("JIRA_SEARCH_MAX_PAGES"), default=5, minimum=1
        ),
        confluence_url=_to_base_url(os.getenv("CONFLUENCE_URL")),
        confluence_email=os.getenv("CONFLUENCE_EMAIL", ""),
        confluence_api_token=os.getenv("CONFLUENCE_API_TOKEN", ""),
        confluence_search_limit=_to_int(
            os.getenv("CONFLUENCE_SEARCH_LIMIT"), default=25, minimum=1
        ),
        http_timeout_seconds=float(os.getenv("HTTP_TIMEOUT_SECONDS", "30")),
        http_verify_ssl=_to_bool(os.getenv("HTTP_VERIFY_SSL"), default=True),
        port=_to_int(os.getenv("PORT"), default=7000, minimum=1),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
