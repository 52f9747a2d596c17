"""Search result data models."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from reposcope.exceptions import MalformedResponseError
from reposcope.types.repos import Repository


@dataclass(frozen=True)
class ResultPage:
    """One page of search results, rank-ordered as returned by the endpoint."""

    items: tuple[Repository, ...]
    total_count: int
    fetched_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    incomplete_results: bool = False

    @classmethod
    def from_payload(
        cls, payload: Any, fetched_at: datetime | None = None
    ) -> "ResultPage":
        """
        Build a ResultPage from a decoded search response body.

        Missing ``items`` is read as an empty page and missing ``total_count``
        as 0; anything that is not shaped like a search payload is rejected.

        Raises:
            MalformedResponseError: If the body is not an object or items is not a list
        """
        if not isinstance(payload, dict):
            raise MalformedResponseError(
                f"search response must be an object, got {type(payload).__name__}"
            )

        raw_items = payload.get("items")
        if raw_items is None:
            raw_items = []
        if not isinstance(raw_items, list):
            raise MalformedResponseError(
                f"search response items must be a list, got {type(raw_items).__name__}"
            )

        total_count = payload.get("total_count")
        if isinstance(total_count, bool) or not isinstance(total_count, int) or total_count < 0:
            total_count = 0

        return cls(
            items=tuple(Repository.from_api(item) for item in raw_items),
            total_count=total_count,
            fetched_at=fetched_at or datetime.now(timezone.utc),
            incomplete_results=bool(payload.get("incomplete_results", False)),
        )

    def __len__(self) -> int:
        return len(self.items)
