"""
Concurrent fan-out for independent reads.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from concurrent.futures import ThreadPoolExecutor
from typing import Any

MAX_WORKERS = 8


def fetch_all(calls: Mapping[str, Callable[[], Any]]) -> dict[str, Any]:
    """Run every call on a worker thread and return results by name.

    Exceptions from a call propagate to the caller once all calls finish.
    """
    if not calls:
        return {}
    with ThreadPoolExecutor(max_workers=min(MAX_WORKERS, len(calls))) as pool:
        futures = {name: pool.submit(call) for name, call in calls.items()}
    return {name: future.result() for name, future in futures.items()}
