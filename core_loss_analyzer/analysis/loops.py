"""Minor-loop decomposition of one flux-density cycle.

IGSE energy has to be evaluated per minor loop, so the cycle is first split
into nested excursions.

Definition used throughout
--------------------------
A minor loop starts at a local extremum ``i`` of the flux sequence and ends
at the first later sample ``j`` that re-crosses the level ``flux[i]`` in the
closing direction:

- local maximum (``diff[i-1] > 0`` and ``diff[i] < 0``): first ``j > i`` with
  ``flux[j] >= flux[i]``;
- local minimum (``diff[i-1] < 0`` and ``diff[i] > 0``): first ``j > i`` with
  ``flux[j] <= flux[i]``.

No interpolation is done at the crossing; sample ``j`` itself belongs to the
loop. For undersampled signals this is a visible approximation.

Labelling
---------
Every sample receives the label of the innermost loop that contains it.
Labels are ``uint32`` assigned in discovery order starting at 1; label 0
marks samples outside every minor loop (the major loop of the cycle).
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import numpy as np

from core_loss_analyzer.errors import DecompositionError, LoopCountOverflowError
from core_loss_analyzer.models.profile import MAX_LOOP_LABEL
from core_loss_analyzer.models.results import MinorLoop
from core_loss_analyzer.util.logging import get_logger

logger = get_logger(__name__)

Region = Tuple[int, int]


def _first_crossing(flux: np.ndarray, i: int, hi: int, *, from_max: bool) -> Optional[int]:
    """Index of the first sample in ``(i, hi]`` that re-crosses ``flux[i]``."""
    seg = flux[i + 1 : hi + 1]
    if from_max:
        hits = np.flatnonzero(seg >= flux[i])
    else:
        hits = np.flatnonzero(seg <= flux[i])
    if hits.size == 0:
        return None
    return i + 1 + int(hits[0])


def find_outermost_loop(
    flux: np.ndarray,
    diffs: np.ndarray,
    region: Sequence[int],
) -> Optional[Tuple[int, int]]:
    """Find the leftmost minor loop inside ``region``.

    Parameters
    ----------
    flux:
        Flux sequence, shape ``(N,)``.
    diffs:
        ``np.diff(flux)``, shape ``(N-1,)``. Passed in so repeated calls do
        not recompute it.
    region:
        Closed index interval ``(lo, hi)``. Only the interior indices
        ``lo < i < hi`` are tested as loop starts, and a loop counts only
        if it closes at or before ``hi``.

    Returns
    -------
    (start, end) or None
        The loop with the lowest start index, or None if the region holds
        no complete loop.
    """
    lo, hi = int(region[0]), int(region[1])
    n = len(flux)
    if len(diffs) != n - 1:
        raise ValueError(f"diffs must have length {n - 1}, got {len(diffs)}")
    if hi < lo:
        raise ValueError(f"Invalid region ({lo}, {hi}): hi < lo")
    if lo < 0 or hi > n - 1:
        raise ValueError(f"Region ({lo}, {hi}) outside index range [0, {n - 1}]")
    if hi - lo < 2:
        return None

    # Candidate i runs over lo+1 .. hi-1; "before" is diffs[i-1], "after" is diffs[i].
    before = diffs[lo : hi - 1]
    after = diffs[lo + 1 : hi]
    is_max = (before > 0) & (after < 0)
    is_min = (before < 0) & (after > 0)

    for k in np.flatnonzero(is_max | is_min):
        i = lo + 1 + int(k)
        j = _first_crossing(flux, i, hi, from_max=bool(is_max[k]))
        if j is not None:
            return i, j
    return None


def decompose_loops(
    flux: np.ndarray,
    *,
    max_label: int = MAX_LOOP_LABEL,
) -> Tuple[np.ndarray, Tuple[MinorLoop, ...]]:
    """Label every sample with its innermost enclosing minor loop.

    Pending regions are kept on an explicit stack. When a loop ``(sp, ep)``
    is found in the active region ``(lo, hi)``, the active region is replaced
    by what is left after the loop, ``(ep + 1, hi)``, and the loop interior
    ``(sp + 1, ep)`` is pushed on top so nested loops are found first.
    A region with no loop left is popped. The search ends when the stack is
    empty.

    Parameters
    ----------
    flux:
        Flux sequence, shape ``(N,)``. Normally rotated to start at its minimum.
    max_label:
        The counter may not reach this value. Defaults to the uint32 maximum.

    Returns
    -------
    labels, loops
        ``labels`` is a read-only uint32 array of shape ``(N,)``; ``loops``
        lists the minor loops in discovery order.

    Raises
    ------
    LoopCountOverflowError
        If the label counter reaches ``max_label``.
    DecompositionError
        If a located loop falls outside its region (internal inconsistency).
    """
    b = np.asarray(flux, dtype=np.float64)
    if b.ndim != 1:
        raise ValueError(f"flux must be 1D, got shape {b.shape}")

    max_label = int(max_label)
    if not (2 <= max_label <= MAX_LOOP_LABEL):
        raise ValueError(f"max_label must be in [2, {MAX_LOOP_LABEL}], got {max_label}")

    n = int(b.size)
    labels = np.zeros(n, dtype=np.uint32)
    loops: List[MinorLoop] = []

    diffs = np.diff(b)
    label = 1
    pending: List[Region] = [(0, n - 1)]

    while pending:
        lo, hi = pending[-1]
        if lo > hi:
            # Remainder of a region whose last loop closed exactly at its end.
            pending.pop()
            continue

        found = find_outermost_loop(b, diffs, (lo, hi))
        if found is None:
            pending.pop()
            continue

        sp, ep = found
        if not (lo < sp < ep <= hi):
            raise DecompositionError(
                f"Loop ({sp}, {ep}) is not inside its search region ({lo}, {hi})."
            )

        labels[sp : ep + 1] = label
        loops.append(MinorLoop(label=label, start=sp, end=ep))

        label += 1
        if label >= max_label:
            raise LoopCountOverflowError(max_label, n)

        pending[-1] = (ep + 1, hi)
        pending.append((sp + 1, ep))

    labels.flags.writeable = False
    logger.debug("Decomposed %d samples into %d minor loops", n, len(loops))
    return labels, tuple(loops)


def label_loops(flux: np.ndarray, *, max_label: int = MAX_LOOP_LABEL) -> np.ndarray:
    """Per-sample loop labels only; see :func:`decompose_loops`."""
    labels, _ = decompose_loops(flux, max_label=max_label)
    return labels
