from __future__ import annotations

import pytest

from core.dedup import DedupGuard


def test_duplicate_is_rejected() -> None:
    guard = DedupGuard()
    assert guard.admit("a")
    assert not guard.admit("a")


def test_missing_id_is_always_admitted() -> None:
    guard = DedupGuard()
    assert guard.admit(None)
    assert guard.admit(None)
    assert len(guard) == 0


def test_bounded_eviction_is_oldest_first() -> None:
    guard = DedupGuard(capacity=1000)
    for index in range(1001):
        assert guard.admit(f"id-{index}")

    assert len(guard) == 1000
    assert "id-0" not in guard
    assert "id-1" in guard
    assert "id-1000" in guard


def test_redelivery_does_not_refresh_position() -> None:
    guard = DedupGuard(capacity=2)
    guard.admit("a")
    guard.admit("b")
    assert not guard.admit("a")
    guard.admit("c")
    assert "a" not in guard
    assert "b" in guard


def test_capacity_must_be_positive() -> None:
    with pytest.raises(ValueError):
        DedupGuard(capacity=0)
