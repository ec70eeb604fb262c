"""
Search and filter helpers over snippets.

Plain scans over the full snippet set; no secondary index is kept. The
functions here do not lock anything: `SnippetRepository` calls them while
holding the store's read lock and clones whatever they return.
"""
from __future__ import annotations

from typing import Iterable, List, Optional

from snip.domain.entities.snippet import Snippet


def matches_query(snippet: Snippet, needle: str) -> bool:
    """`needle` must already be lowercased."""
    return (
        needle in snippet.title.lower()
        or needle in snippet.language.lower()
        or needle in snippet.code.lower()
        or needle in (snippet.description or "").lower()
    )


def search(snippets: Iterable[Snippet], query: str) -> Optional[List[Snippet]]:
    """Case-insensitive substring search.

    An empty query returns None, which callers must tell apart from an empty
    list (no matches).
    """
    if not query:
        return None
    needle = query.lower()
    return [s for s in snippets if matches_query(s, needle)]


def filter_by_language(snippets: Iterable[Snippet], language: str) -> List[Snippet]:
    if not language:
        return []
    return [s for s in snippets if s.language == language]


def filter_by_category(snippets: Iterable[Snippet], category_id: int) -> List[Snippet]:
    return [s for s in snippets if s.category_id == category_id]


def filter_by_tag(snippets: Iterable[Snippet], tag_id: int) -> List[Snippet]:
    return [s for s in snippets if s.has_tag(tag_id)]
