from atlassian_proxy.services.normalize import normalize_document, strip_markup
from atlassian_proxy.services.pagination import PageFetcher, fetch_all_pages
from atlassian_proxy.services.types import (
    ContentDocument,
    NormalizedContent,
    Record,
    ResultPage,
    SearchQuery,
    UpstreamError,
)

__all__ = [
    "ContentDocument",
    "NormalizedContent",
    "PageFetcher",
    "Record",
    "ResultPage",
    "SearchQuery",
    "UpstreamError",
    "fetch_all_pages",
    "normalize_document",
    "strip_markup",
]
