"""Tests for candidate filtering and ordering."""

import random

from feature_branching.integrator.label_filter import (
    filter_candidates,
    has_any_label,
    order_candidates,
)


def test_empty_required_is_identity(make_candidate):
    """Test that no required labels returns the input unchanged."""
    candidates = [
        make_candidate(3, labels=("bug",)),
        make_candidate(1),
        make_candidate(2, labels=("next-feature",)),
    ]

    assert filter_candidates(candidates, ()) == candidates


def test_case_insensitive_match(make_candidate):
    """Test that 'Next-Feature' matches a 'next-feature' label."""
    candidates = [make_candidate(1, labels=("next-feature",))]

    assert filter_candidates(candidates, ("Next-Feature",)) == candidates


def test_any_label_qualifies(make_candidate):
    """Test that one matching label out of several is enough."""
    candidate = make_candidate(1, labels=("ui", "NEXT-FEATURE"))

    assert filter_candidates([candidate], ("docs", "next-feature")) == [candidate]


def test_non_matching_dropped_and_order_kept(make_candidate):
    """Test that non-matching candidates are removed without reordering."""
    a = make_candidate(7, labels=("next-feature",))
    b = make_candidate(3, labels=("bug",))
    c = make_candidate(5, labels=("next-feature",))

    assert filter_candidates([a, b, c], ("next-feature",)) == [a, c]


def test_unlabeled_candidate_dropped(make_candidate):
    """Test that a candidate without labels never matches a required label."""
    assert filter_candidates([make_candidate(1)], ("next-feature",)) == []


def test_has_any_label():
    """Test the label intersection helper directly."""
    assert has_any_label(["Bug"], [])
    assert has_any_label(["Bug"], ["bug"])
    assert not has_any_label([], ["bug"])
    assert not has_any_label(["bugfix"], ["bug"])


def test_order_oldest_first(make_candidate):
    """Test that candidates are ordered by creation time."""
    older = make_candidate(20, age=1)
    newer = make_candidate(10, age=5)

    assert order_candidates([newer, older]) == [older, newer]


def test_order_independent_of_input_order(make_candidate):
    """Test that any permutation of the input sorts to the same order."""
    candidates = [make_candidate(n, age=n % 4) for n in range(1, 9)]
    expected = order_candidates(candidates)

    rng = random.Random(42)
    for _ in range(10):
        shuffled = list(candidates)
        rng.shuffle(shuffled)
        assert order_candidates(shuffled) == expected

    created = [c.created_at for c in expected]
    assert created == sorted(created)


def test_order_ties_broken_by_number(make_candidate):
    """Test that equal creation times fall back to pull request number."""
    a = make_candidate(12, age=0)
    b = make_candidate(4, age=0)

    assert [c.number for c in order_candidates([a, b])] == [4, 12]
