"""
In-process cache of server-rendered pages.

Pages are cached per (path, language). ``revalidate_path`` drops every cached
variant of a path so the next request renders fresh. Revalidating ``/`` drops
every page, since all pages render the shared layout (navigation, footer,
contact details). Listeners registered with ``on_revalidate`` are told about
each revalidated path; a failing listener is logged and skipped.

A render that started before a revalidation must not be stored after it. Callers
take ``generation(path)`` before rendering and pass it to ``put``, which discards
the page if the path was revalidated in between.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

logger = logging.getLogger(__name__)

Generation = tuple[int, int]


class PageCache:
    def __init__(self) -> None:
        self._pages: dict[tuple[str, str], str] = {}
        self._listeners: list[Callable[[str], None]] = []
        self._lock = threading.Lock()
        # "/" bumps the site-wide counter, any other path its own
        self._site_generation = 0
        self._path_generations: dict[str, int] = {}

    def _generation(self, path: str) -> Generation:
        return self._site_generation, self._path_generations.get(path, 0)

    def generation(self, path: str) -> Generation:
        with self._lock:
            return self._generation(path)

    def get(self, path: str, language: str) -> str | None:
        with self._lock:
            return self._pages.get((path, language))

    def put(
        self, path: str, language: str, html: str, *, since: Generation | None = None
    ) -> bool:
        """Store a page. Returns False when ``path`` was revalidated after ``since``."""
        with self._lock:
            if since is not None and since != self._generation(path):
                logger.debug("Discarding stale render of %s (%s)", path, language)
                return False
            self._pages[(path, language)] = html
            return True

    def on_revalidate(self, listener: Callable[[str], None]) -> None:
        self._listeners.append(listener)

    def revalidate_path(self, path: str) -> None:
        with self._lock:
            if path == "/":
                self._site_generation += 1
            else:
                self._path_generations[path] = self._path_generations.get(path, 0) + 1
            for key in [k for k in self._pages if path == "/" or k[0] == path]:
                del self._pages[key]
        for listener in self._listeners:
            try:
                listener(path)
            except Exception as e:
                logger.warning("Revalidation hook failed for %s: %s", path, e)
