from dataclasses import dataclass, field
from typing import Any

Record = dict[str, Any]


class UpstreamError(RuntimeError):
    def __init__(self, message: str, *, service: str, context: str = "") -> None:
        super().__init__(message)
        self.service = service
        self.context = context

    def __str__(self) -> str:
        base = super().__str__()
        if self.context:
            return f"{self.service}: {base} (context: {self.context})"
        return f"{self.service}: {base}"


@dataclass(frozen=True)
class SearchQuery:
    query_text: str
    page_size: int = 10
    max_pages: int = 5

    def __post_init__(self) -> None:
        if self.page_size < 1:
            raise ValueError("page_size must be greater than 0")
        if self.max_pages < 1:
            raise ValueError("max_pages must be greater than 0")


@dataclass(frozen=True)
class ResultPage:
    items: list[Record] = field(default_factory=list)
    is_last: bool = False


@dataclass(frozen=True)
class ContentDocument:
    title: str
    raw_body: str


@dataclass(frozen=True)
class NormalizedContent:
    title: str
    text: str
