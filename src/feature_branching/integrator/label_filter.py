"""Candidate selection and ordering."""

from collections.abc import Iterable, Sequence

from .models import Candidate


def has_any_label(labels: Iterable[str], required: Iterable[str]) -> bool:
    """Check whether ``labels`` intersects ``required``, ignoring case.

    An empty ``required`` collection matches everything.
    """
    wanted = {label.lower() for label in required}
    if not wanted:
        return True
    return any(label.lower() in wanted for label in labels)


def filter_candidates(
    candidates: Sequence[Candidate], required_labels: Iterable[str]
) -> list[Candidate]:
    """Keep candidates carrying at least one required label.

    Parameters
    ----------
    candidates : Sequence[Candidate]
        Candidates as returned by the pull request client.
    required_labels : Iterable[str]
        Label names; comparison is case-insensitive. Empty means no filtering.

    Returns
    -------
    list[Candidate]
        Qualifying candidates in their input order.

    """
    required = tuple(required_labels)
    return [c for c in candidates if has_any_label(c.labels, required)]


def order_candidates(candidates: Iterable[Candidate]) -> list[Candidate]:
    """Sort candidates oldest first, breaking ties by pull request number."""
    return sorted(candidates, key=lambda c: (c.created_at, c.number))
