#!/usr/bin/env python3
"""
Basic reposcope usage example.

Searches for a query, then pages through this week's trending Rust
repositories using the async controllers.
Run with: python examples/basic_usage.py [query]
"""

import asyncio
import logging
import sys

from reposcope import AsyncRepoScopeClient, RepoScopeError, Snapshot, configure_logging


def render(title: str, snapshot: Snapshot) -> None:
    print(f"\n=== {title} (page {snapshot.page}) ===")
    if snapshot.error is not None:
        print(f"   Failed to load repositories: {snapshot.error}")
        return
    if not snapshot.items:
        print("   No repositories found")
        return
    print(f"   Showing {len(snapshot.items)} of {snapshot.total_count:,} repositories")
    for rank, repo in snapshot.ranked():
        print(f"   {rank:>3}. {repo.full_name:<45} {repo.stargazers_count:>8,} stars")
    print(f"   previous: {snapshot.has_previous}, next: {snapshot.has_next}")


async def main(query: str) -> None:
    async with AsyncRepoScopeClient.from_env() as client:
        # 1. Ad-hoc search
        search = client.search_controller()
        search.set_query(query)
        render(f'Search "{query}"', await search.submit())

        # 2. Trending this week, Rust only
        trending = client.trending_controller()
        await trending.set_range("weekly")
        snapshot = await trending.set_language("rust")
        render("Trending this week in Rust", snapshot)

        if snapshot.has_next:
            render("Trending this week in Rust", await trending.next_page())


if __name__ == "__main__":
    configure_logging(level=logging.WARNING)
    try:
        asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else "raft"))
    except RepoScopeError as e:
        print(f"Error: {e}")
        sys.exit(1)
