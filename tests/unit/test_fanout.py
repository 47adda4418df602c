"""
Tests for concurrent fan-out.
"""

from __future__ import annotations

import threading

import pytest

from chosen_arrows.components.fanout import fetch_all


def test_results_by_name() -> None:
    assert fetch_all({"a": lambda: 1, "b": lambda: "two"}) == {"a": 1, "b": "two"}


def test_empty() -> None:
    assert fetch_all({}) == {}


def test_calls_overlap() -> None:
    barrier = threading.Barrier(3, timeout=5)

    def wait() -> bool:
        barrier.wait()
        return True

    assert fetch_all({name: wait for name in "abc"}) == {"a": True, "b": True, "c": True}


def test_error_propagates_after_all_finish() -> None:
    finished: list[str] = []

    def slow() -> None:
        finished.append("slow")

    def broken() -> None:
        raise ValueError("bad read")

    with pytest.raises(ValueError, match="bad read"):
        fetch_all({"broken": broken, "slow": slow})
    assert finished == ["slow"]
