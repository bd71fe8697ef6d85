"""Tests for minor-loop location and decomposition."""

from __future__ import annotations

import numpy as np
import pytest

from core_loss_analyzer.analysis.loops import decompose_loops, find_outermost_loop, label_loops
from core_loss_analyzer.errors import LoopCountOverflowError
from core_loss_analyzer.models.results import MinorLoop


NESTED = np.array([0.0, 1.0, 0.5, 0.7, 0.5, 1.0, 0.0])


def _wiggles(n_wiggles: int) -> np.ndarray:
    """Outer excursion 0 -> 10 -> 0 with n small 5/6 oscillations inside."""
    return np.array([0.0, 10.0] + [5.0, 6.0] * n_wiggles + [5.0, 10.0, 0.0])


def _backtrack_labels(b: np.ndarray) -> np.ndarray:
    """Single-region loop with the "last index with the same label" resume step.

    Straightforward port of the classic formulation, used as an oracle for
    the stack-based decomposer.
    """
    n = b.size
    marks = np.zeros(n, dtype=np.uint32)
    d = np.diff(b)
    label = 1
    lo, hi = 0, n - 1
    while True:
        found = None
        for i in range(lo + 1, hi):
            if d[i - 1] > 0 and d[i] < 0:
                hits = np.flatnonzero(b[i + 1 :] >= b[i])
                if hits.size and i + 1 + hits[0] <= hi:
                    found = (i, i + 1 + int(hits[0]))
                    break
            if d[i - 1] < 0 and d[i] > 0:
                hits = np.flatnonzero(b[i + 1 :] <= b[i])
                if hits.size and i + 1 + hits[0] <= hi:
                    found = (i, i + 1 + int(hits[0]))
                    break
        if found is None:
            if hi == n - 1:
                break
            lo = hi + 1
            hi = int(np.flatnonzero(marks == marks[lo])[-1])
        else:
            sp, ep = found
            marks[sp : ep + 1] = label
            label += 1
            lo, hi = sp + 1, ep
    return marks


# -----------------------------------------------------------------------
# find_outermost_loop
# -----------------------------------------------------------------------


def test_locator_finds_leftmost_loop() -> None:
    d = np.diff(NESTED)
    assert find_outermost_loop(NESTED, d, (0, 6)) == (1, 5)


def test_locator_skips_region_start() -> None:
    # Index 2 is a local minimum but it is the region boundary, so the
    # first candidate is the maximum at index 3.
    d = np.diff(NESTED)
    assert find_outermost_loop(NESTED, d, (2, 5)) == (3, 5)


def test_locator_ignores_crossing_outside_region() -> None:
    b = np.array([0.0, 2.0, 1.0, 1.5, 3.0, 0.0])
    d = np.diff(b)
    # Max at 1 closes at 4, min at 2 closes at 5: both beyond hi=3.
    assert find_outermost_loop(b, d, (0, 3)) is None
    assert find_outermost_loop(b, d, (0, 5)) == (1, 4)


def test_locator_minimum_closes_on_lower_or_equal() -> None:
    b = np.array([1.0, 0.0, 0.5, 0.0, 1.0])
    d = np.diff(b)
    # Closes on the sample equal to the opening minimum.
    assert find_outermost_loop(b, d, (0, 4)) == (1, 3)


def test_locator_monotone_and_flat_have_no_loop() -> None:
    up = np.arange(6, dtype=float)
    assert find_outermost_loop(up, np.diff(up), (0, 5)) is None

    flat = np.array([0.0, 1.0, 1.0, 0.0])
    assert find_outermost_loop(flat, np.diff(flat), (0, 3)) is None


def test_locator_short_region_has_no_interior() -> None:
    d = np.diff(NESTED)
    assert find_outermost_loop(NESTED, d, (3, 3)) is None
    assert find_outermost_loop(NESTED, d, (3, 4)) is None


def test_locator_rejects_bad_region() -> None:
    d = np.diff(NESTED)
    with pytest.raises(ValueError):
        find_outermost_loop(NESTED, d, (4, 2))
    with pytest.raises(ValueError):
        find_outermost_loop(NESTED, d, (0, 7))
    with pytest.raises(ValueError):
        find_outermost_loop(NESTED, d[:-1], (0, 6))


# -----------------------------------------------------------------------
# decompose_loops / label_loops
# -----------------------------------------------------------------------


def test_triangle_has_single_label() -> None:
    b = np.array([0.0, 1.0, 2.0, 3.0, 2.0, 1.0, 0.0])
    labels, loops = decompose_loops(b)
    assert loops == ()
    assert labels.dtype == np.uint32
    assert np.unique(labels).tolist() == [0]


def test_nested_loop_gets_its_own_label() -> None:
    labels, loops = decompose_loops(NESTED)

    assert labels.tolist() == [0, 1, 1, 2, 2, 2, 0]
    assert loops == (
        MinorLoop(label=1, start=1, end=5),
        MinorLoop(label=2, start=3, end=5),
    )
    # Inner excursion and outer remainder differ; every index has exactly one label.
    assert labels[3] != labels[1]
    assert labels.shape == NESTED.shape


def test_sibling_loops_resume_after_each_other() -> None:
    b = _wiggles(3)
    labels, loops = decompose_loops(b)

    assert loops[0] == MinorLoop(label=1, start=1, end=b.size - 2)
    assert [(lp.start, lp.end) for lp in loops[1:]] == [(3, 5), (7, 9)]
    assert labels[0] == 0 and labels[-1] == 0
    # Labels are assigned in discovery order.
    assert [lp.label for lp in loops] == list(range(1, len(loops) + 1))


def test_labels_are_read_only() -> None:
    labels = label_loops(NESTED)
    with pytest.raises(ValueError):
        labels[0] = 5


def test_max_label_overflow_raises() -> None:
    b = _wiggles(50)
    _, loops = decompose_loops(b)
    assert len(loops) > 10

    with pytest.raises(LoopCountOverflowError) as exc:
        label_loops(b, max_label=10)
    assert exc.value.max_label == 10
    assert exc.value.n_samples == b.size


def test_noise_overflows_small_label_limit() -> None:
    rng = np.random.default_rng(1234)
    noise = rng.normal(0.0, 1e-12, size=2000)
    with pytest.raises(LoopCountOverflowError):
        label_loops(noise, max_label=5)


def test_overflow_is_a_runtime_error() -> None:
    with pytest.raises(RuntimeError):
        label_loops(_wiggles(10), max_label=2)


def test_max_label_bounds() -> None:
    with pytest.raises(ValueError):
        label_loops(NESTED, max_label=1)
    with pytest.raises(ValueError):
        label_loops(NESTED, max_label=2**40)


def test_loop_boundaries_respect_recrossing_rule() -> None:
    rng = np.random.default_rng(7)
    b = np.cumsum(rng.normal(size=300))
    _, loops = decompose_loops(b)
    assert loops
    for lp in loops:
        s, e = lp.start, lp.end
        if b[s] > b[s - 1]:  # opened at a maximum
            assert b[e] >= b[s]
            assert np.all(b[s + 1 : e] < b[s])
        else:
            assert b[e] <= b[s]
            assert np.all(b[s + 1 : e] > b[s])


@pytest.mark.parametrize("seed", [0, 1, 2, 3, 4])
def test_stack_matches_backtracking_formulation(seed: int) -> None:
    rng = np.random.default_rng(seed)
    walk = np.cumsum(rng.normal(size=250))
    assert np.array_equal(label_loops(walk), _backtrack_labels(walk))

    # Coarse integer levels exercise ties and plateaus.
    levels = rng.integers(0, 6, size=120).astype(float)
    assert np.array_equal(label_loops(levels), _backtrack_labels(levels))
