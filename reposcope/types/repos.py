"""Repository data model.

Search items are passed through to the presentation surface; only the
fields a repository card shows are lifted out of the raw payload.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from reposcope.exceptions import MalformedResponseError


def _parse_timestamp(value: Any) -> datetime | None:
    if not isinstance(value, str) or not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


@dataclass(frozen=True)
class Repository:
    """A repository as returned by the search endpoint."""

    id: int
    name: str
    full_name: str
    owner_login: str | None
    owner_avatar_url: str | None
    html_url: str | None
    description: str | None
    language: str | None
    stargazers_count: int
    forks_count: int
    open_issues_count: int
    topics: tuple[str, ...] = ()
    created_at: datetime | None = None
    updated_at: datetime | None = None
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_api(cls, item: Any) -> "Repository":
        """
        Build a Repository from one element of a search response's items.

        Raises:
            MalformedResponseError: If the item is not an object, has no integer
                id, or has an owner or topics of the wrong shape
        """
        if not isinstance(item, dict):
            raise MalformedResponseError(
                f"search item must be an object, got {type(item).__name__}"
            )

        repo_id = item.get("id")
        if isinstance(repo_id, bool) or not isinstance(repo_id, int):
            raise MalformedResponseError(f"search item has no integer id: {repo_id!r}")

        owner = item.get("owner") or {}
        if not isinstance(owner, dict):
            raise MalformedResponseError(
                f"search item {repo_id} has a non-object owner: {type(owner).__name__}"
            )

        topics = item.get("topics") or []
        if not isinstance(topics, list) or not all(isinstance(t, str) for t in topics):
            raise MalformedResponseError(f"search item {repo_id} has malformed topics: {topics!r}")

        name = item.get("name") or ""

        return cls(
            id=repo_id,
            name=name,
            full_name=item.get("full_name") or name,
            owner_login=owner.get("login"),
            owner_avatar_url=owner.get("avatar_url"),
            html_url=item.get("html_url"),
            description=item.get("description"),
            language=item.get("language"),
            stargazers_count=item.get("stargazers_count") or 0,
            forks_count=item.get("forks_count") or 0,
            open_issues_count=item.get("open_issues_count") or 0,
            topics=tuple(topics),
            created_at=_parse_timestamp(item.get("created_at")),
            updated_at=_parse_timestamp(item.get("updated_at")),
            raw=item,
        )
