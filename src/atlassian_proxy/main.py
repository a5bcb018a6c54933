import logging
from typing import Annotated, Any

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from atlassian_proxy.config import get_settings
from atlassian_proxy.confluence import ConfluenceClient, HttpConfluenceClient
from atlassian_proxy.jira import HttpJiraClient, JiraClient
from atlassian_proxy.services import (
    ResultPage,
    SearchQuery,
    UpstreamError,
    fetch_all_pages,
    normalize_document,
)

logger = logging.getLogger(__name__)

app = FastAPI(title="Atlassian Proxy", version="0.1.0")


class PageText(BaseModel):
    title: str
    text: str


def get_jira_client() -> JiraClient:
    settings = get_settings()
    return HttpJiraClient(
        base_url=settings.jira_url,
        email=settings.jira_email,
        api_token=settings.jira_api_token,
        api_version=settings.jira_api_version,
        timeout_seconds=settings.http_timeout_seconds,
        verify_ssl=settings.http_verify_ssl,
    )


def get_confluence_client() -> ConfluenceClient:
    settings = get_settings()
    return HttpConfluenceClient(
        base_url=settings.confluence_url,
        email=settings.confluence_email,
        api_token=settings.confluence_api_token,
        timeout_seconds=settings.http_timeout_seconds,
        verify_ssl=settings.http_verify_ssl,
    )


def _require(value: str | None, message: str) -> str:
    if value is None or not value.strip():
        raise HTTPException(status_code=400, detail=message)
    return value


@app.get("/", response_class=PlainTextResponse)
def index() -> str:
    return "Atlassian proxy is running"


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/jira/search")
def jira_search(
    jira: Annotated[JiraClient, Depends(get_jira_client)],
    jql: str | None = Query(default=None),
    page_size: int | None = Query(default=None, ge=1, le=100),
    max_pages: int | None = Query(default=None, ge=1, le=50),
) -> list[dict[str, Any]]:
    jql = _require(jql, "Missing required JQL query")
    settings = get_settings()
    query = SearchQuery(
        query_text=jql,
        page_size=page_size or settings.jira_search_page_size,
        max_pages=max_pages or settings.jira_search_max_pages,
    )

    def fetch_page(query_text: str, page_size: int, offset: int) -> ResultPage:
        return jira.search_issues(
            query_text,
            fields=settings.jira_search_fields,
            max_results=page_size,
            start_at=offset,
        )

    try:
        return fetch_all_pages(query, fetch_page)
    except UpstreamError as exc:
        logger.exception("Jira search error for %s", exc.context)
        raise HTTPException(status_code=500, detail="Failed to search Jira issues") from exc


@app.get("/jira/issue/{key}")
def jira_issue(
    key: str,
    jira: Annotated[JiraClient, Depends(get_jira_client)],
) -> dict[str, Any]:
    try:
        return jira.find_issue(key)
    except UpstreamError as exc:
        logger.exception("Jira issue error for %s", exc.context)
        raise HTTPException(status_code=500, detail="Failed to fetch Jira issue") from exc


@app.get("/confluence/search")
def confluence_search(
    confluence: Annotated[ConfluenceClient, Depends(get_confluence_client)],
    cql: str | None = Query(default=None),
    limit: int | None = Query(default=None, ge=1, le=100),
    start: int = Query(default=0, ge=0),
) -> dict[str, Any]:
    cql = _require(cql, "Missing required CQL query")
    settings = get_settings()

    try:
        return confluence.search_content(
            cql,
            limit=limit or settings.confluence_search_limit,
            start=start,
        )
    except UpstreamError as exc:
        logger.exception("Confluence search error for %s", exc.context)
        raise HTTPException(
            status_code=500, detail="Failed to search Confluence content"
        ) from exc


@app.get("/confluence/page/{page_id}", response_model=PageText)
def confluence_page(
    page_id: str,
    confluence: Annotated[ConfluenceClient, Depends(get_confluence_client)],
) -> PageText:
    try:
        document = confluence.get_page(page_id)
    except UpstreamError as exc:
        logger.exception("Confluence page error for %s", exc.context)
        raise HTTPException(
            status_code=500, detail="Failed to fetch or parse Confluence page"
        ) from exc

    normalized = normalize_document(document)
    return PageText(title=normalized.title, text=normalized.text)


def run() -> None:
    import uvicorn

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="[%(levelname)s] %(asctime)s %(name)s - %(message)s",
    )
    logger.info("Starting Atlassian proxy on port %d", settings.port)
    uvicorn.run("atlassian_proxy.main:app", host="0.0.0.0", port=settings.port, reload=False)


if __name__ == "__main__":
    run()
