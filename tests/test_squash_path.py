"""Tests for loop elimination on traversal paths."""

import pytest

from pathlike.domain.path import squash_path


def test_squash_returns_to_earlier_node() -> None:
    """Returning to B drops everything visited after the first B."""
    assert squash_path(["A", "B", "C", "B", "D"]) == ["A", "B", "D"]


def test_squash_back_and_forth() -> None:
    assert squash_path(["root", "A", "B", "A", "C"]) == ["root", "A", "C"]
    assert squash_path(["A", "B", "A", "B"]) == ["A", "B"]


def test_squash_simple_path_unchanged() -> None:
    assert squash_path(["A", "B", "C"]) == ["A", "B", "C"]
    assert squash_path([]) == []


def test_squash_return_to_start() -> None:
    assert squash_path(["A", "B", "C", "D", "A"]) == ["A"]
    assert squash_path(["A", "B", "C", "D", "A", "E"]) == ["A", "E"]


def test_squash_does_not_mutate_input() -> None:
    path = ["A", "B", "A"]
    squash_path(path)
    assert path == ["A", "B", "A"]


@pytest.mark.parametrize(
    "path",
    [
        ["A", "B", "C", "B", "D"],
        ["A", "B", "C", "A", "D", "C", "E"],
        ["x", "y", "z", "y", "x", "w", "z", "w", "v"],
        ["n1", "n2", "n3", "n4", "n2", "n5", "n3", "n6", "n1", "n7"],
    ],
)
def test_squash_is_idempotent_and_duplicate_free(path: list[str]) -> None:
    squashed = squash_path(path)

    assert squash_path(squashed) == squashed, "Squashing twice should change nothing"
    assert len(squashed) == len(set(squashed)), "Squashed path should not repeat nodes"
    assert squashed[-1] == path[-1], "Squashed path should end at the last visited node"
