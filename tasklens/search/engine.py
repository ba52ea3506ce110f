"""Search entry point tying together ranking, composition and history."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from tasklens.search.composer import compose
from tasklens.search.models import SearchOptions, SearchResult
from tasklens.search.searchers import search_entities
from tasklens.storage.history import HistoryStore
from tasklens.tasks.models import Project, Task, User
from tasklens.utils.logger import log_function_call, truncate_query
from tasklens.utils.mixins import LoggerMixin


@dataclass
class SearchResponse:
    """One page of composed results."""

    query: str
    results: list[SearchResult] = field(default_factory=list)
    total_results: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "query": self.query,
            "results": [result.to_dict() for result in self.results],
            "total_results": self.total_results,
        }


class SearchEngine(LoggerMixin):
    """Runs searches over caller-supplied collections.

    Every non-blank query is recorded in ``history`` when one is given.
    """

    def __init__(self, history: HistoryStore | None = None):
        self.history = history

    def search(
        self,
        options: SearchOptions,
        tasks: Sequence[Task] = (),
        projects: Sequence[Project] = (),
        users: Sequence[User] = (),
    ) -> SearchResponse:
        """Rank, filter, sort and paginate.

        ``total_results`` counts everything that passed the filters, before
        ``offset`` and ``limit`` are applied.
        """
        query = options.query
        if not query.strip():
            return SearchResponse(query=query)

        log_function_call(
            "SearchEngine.search",
            query=truncate_query(query),
            sort_by=options.sort_by.value,
            sort_order=options.sort_order.value,
        )

        types = options.filters.types if options.filters else None
        ranked = search_entities(query, tasks, projects, users, types=types)
        composed = compose(ranked, options.filters, options.sort_by, options.sort_order)
        page = composed[options.offset : options.offset + options.limit]

        self.logger.info(
            "Search completed",
            query=truncate_query(query),
            candidates=len(tasks) + len(projects) + len(users),
            matched=len(ranked),
            total_results=len(composed),
            returned=len(page),
        )

        if self.history is not None:
            self.history.add(query, options.filters, len(composed))

        return SearchResponse(query=query, results=page, total_results=len(composed))

    def suggestions(self, query: str) -> list[str]:
        if self.history is None:
            return []
        return self.history.suggestions(query)

    def clear_history(self) -> None:
        if self.history is not None:
            self.history.clear()
