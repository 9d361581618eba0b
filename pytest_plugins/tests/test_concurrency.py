"""Test the counter the xdist workers use to share a resource."""

from pathlib import Path

from ..concurrency import SharedCounter


def test_shared_counter(tmp_path: Path):
    counter = SharedCounter(tmp_path / "users")
    assert counter.value() == 0
    assert counter.add(1) == 1
    assert counter.add(1) == 2

    # a second handle on the same file sees the same value
    other = SharedCounter(tmp_path / "users")
    assert other.add(-1) == 1
    assert counter.value() == 1
    assert (tmp_path / "users").read_text() == "1"


def test_shared_counter_lock_is_reentrant(tmp_path: Path):
    counter = SharedCounter(tmp_path / "users")
    counter.add(1)
    with counter.lock:
        if counter.add(-1) == 0:
            counter.remove()
    assert not (tmp_path / "users").exists()
    assert counter.value() == 0
