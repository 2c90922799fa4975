"""
Book search.

`search_books` is a pure filter over a list of book dicts. `parallel_search`
splits a snapshot into contiguous chunks, filters them on a bounded thread
pool and joins the partial results in chunk order, so the output order is
the snapshot order whatever the worker count.
"""
import logging
import math
import os
from concurrent.futures import ThreadPoolExecutor
from enum import Enum

from sqlalchemy import select

from sudut_buku.models.book import Book

logger = logging.getLogger(__name__)


class SearchMode(Enum):
    TITLE = "title"
    AUTHOR = "author"
    CATEGORY = "category"

    @classmethod
    def parse(cls, value) -> "SearchMode":
        if isinstance(value, cls):
            return value
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.TITLE


def search_books(collection, mode: SearchMode, query: str) -> list:
    q = (query or "").lower()
    field = mode.value
    return [book for book in collection if q in (book.get(field) or "").lower()]


def default_workers() -> int:
    return max(1, os.cpu_count() or 1)


def chunk_snapshot(snapshot, workers: int) -> list:
    workers = max(1, int(workers or 1))
    if not snapshot:
        return []
    size = math.ceil(len(snapshot) / workers)
    return [snapshot[i:i + size] for i in range(0, len(snapshot), size)]


def parallel_search(snapshot, mode: SearchMode, query: str, workers: int | None = None,
                    search_fn=search_books) -> list:
    chunks = chunk_snapshot(list(snapshot), workers or default_workers())
    if not chunks:
        return []

    results = []
    with ThreadPoolExecutor(max_workers=len(chunks), thread_name_prefix="search") as pool:
        futures = [pool.submit(search_fn, chunk, mode, query) for chunk in chunks]
        for index, future in enumerate(futures):
            try:
                results.extend(future.result())
            except Exception as e:
                # a failed chunk contributes nothing, the others still count
                logger.error(f"[search] chunk {index + 1}/{len(chunks)} failed, dropped: {e!r}")
    return results


class SearchService:
    def __init__(self, session, workers: int | None = None):
        self.session = session
        self.workers = workers or default_workers()

    def snapshot(self) -> list:
        books = self.session.scalars(select(Book).order_by(Book.id)).all()
        return [b.to_dict() for b in books]

    def search(self, mode, query: str) -> list:
        return parallel_search(self.snapshot(), SearchMode.parse(mode), query, self.workers)
