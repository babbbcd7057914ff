"""
Deferred correction of offset points at collinear segments.

When two collinear segments have different offset distances there is no
single miter point. Under the PROPORTIONAL and PROJECT policies the main
loop emits a placeholder and records its index here. Once every other
point is known, runs of consecutive placeholders are repositioned
between the resolved points on either side of the run (the anchors).

On closed loops a run may wrap around index 0; the first and last run
are then merged into one.
"""

from dataclasses import dataclass
from typing import Callable, List, Sequence, TypeVar
import logging

from ..errors import OffsetError
from ..models.geometry import Line2D, Point2D
from ..utils.math_utils import intersect_rays

logger = logging.getLogger(__name__)

T = TypeVar('T')


@dataclass(frozen=True, slots=True)
class ProportionalFix:
    """Placeholder that is moved to the same relative position as its input vertex."""
    idx_res: int   # Index of the placeholder in the output
    idx_orig: int  # Index of the vertex in the input (shifts after chamfers or skips)


@dataclass(frozen=True, slots=True)
class ProjectFix:
    """Placeholder that is projected along a direction onto the anchor line."""
    idx: int  # Index of the placeholder in the output
    direction: Point2D


def chunk_by(items: Sequence[T], split: Callable[[T, T], bool]) -> List[List[T]]:
    """
    Split items into runs.

    A new run starts whenever split(current, previous) is True.

    Args:
        items: Items to split
        split: Predicate on (current, previous)

    Returns:
        List of non-empty runs, in order
    """
    chunks: List[List[T]] = []
    for i, item in enumerate(items):
        if i == 0 or split(item, items[i - 1]):
            chunks.append([])
        chunks[-1].append(item)
    return chunks


def reloop(chunks: List[List[T]], last_idx: int, get_idx: Callable[[T], int]) -> None:
    """
    Merge the last run into the first one if together they wrap around index 0.

    Modifies chunks in place. The merged run keeps loop order, so its
    items go from the end of the output across the start.

    Args:
        chunks: Runs as returned by chunk_by()
        last_idx: Last valid index of the output
        get_idx: Returns the output index of an item
    """
    if len(chunks) < 2:
        return

    firsts = chunks[0]
    lasts = chunks[-1]
    if get_idx(firsts[0]) == 0 and get_idx(lasts[-1]) == last_idx:
        lasts.extend(firsts)
        chunks[0] = lasts
        chunks.pop()


def _starts_new_run_proportional(this: ProportionalFix, prev: ProportionalFix) -> bool:
    return this.idx_res != prev.idx_res + 1


def _starts_new_run_project(this: ProjectFix, prev: ProjectFix) -> bool:
    return this.idx != prev.idx + 1


def distribute_proportionally(
    res: List[Point2D],
    fixes: List[ProportionalFix],
    originals: Sequence[Point2D]
) -> None:
    """
    Reposition placeholders proportionally between their anchors.

    For each run, the input vertices are projected onto the line between
    the input anchors. The resulting parameters are evaluated on the line
    between the output anchors. Offset segments through the run are no
    longer parallel to the input, but the point count is kept.

    Args:
        res: Offset points, modified in place
        fixes: Placeholder records in output order
        originals: Input polyline
    """
    if not fixes:
        return

    fixes = list(fixes)
    # The closing point of a closed loop repeats placeholder 0
    if fixes[0].idx_res == 0:
        fixes.append(ProportionalFix(idx_res=len(res) - 1, idx_orig=len(originals) - 1))

    chunks = chunk_by(fixes, _starts_new_run_proportional)
    reloop(chunks, len(res) - 1, lambda f: f.idx_res)

    n_res = len(res)
    n_orig = len(originals)
    for chunk in chunks:
        offset_line = Line2D(
            res[(chunk[0].idx_res - 1) % n_res],
            res[(chunk[-1].idx_res + 1) % n_res]
        )
        orig_line = Line2D(
            originals[(chunk[0].idx_orig - 1) % n_orig],
            originals[(chunk[-1].idx_orig + 1) % n_orig]
        )
        for fix in chunk:
            t = orig_line.ray_closest_parameter(originals[fix.idx_orig])
            res[fix.idx_res] = offset_line.evaluate_at(t)

    logger.debug(
        f"Distributed {len(fixes)} collinear points proportionally in {len(chunks)} runs"
    )


def project_onto_anchors(res: List[Point2D], fixes: List[ProjectFix]) -> None:
    """
    Reposition placeholders by projecting them onto the anchor line.

    Each placeholder (still at its input vertex) moves along its stored
    direction until it meets the line between the output anchors of its
    run. At shallow angles with very different distances the result can
    lie outside the anchor span; this is logged but kept.

    Args:
        res: Offset points, modified in place
        fixes: Placeholder records in output order

    Raises:
        OffsetError: If a projection direction is parallel to its anchor line
    """
    if not fixes:
        return

    fixes = list(fixes)
    # The closing point of a closed loop repeats placeholder 0
    if fixes[0].idx == 0:
        fixes.append(ProjectFix(idx=len(res) - 1, direction=fixes[0].direction))

    chunks = chunk_by(fixes, _starts_new_run_project)
    reloop(chunks, len(res) - 1, lambda f: f.idx)

    n_res = len(res)
    for chunk in chunks:
        anchor_line = Line2D(
            res[(chunk[0].idx - 1) % n_res],
            res[(chunk[-1].idx + 1) % n_res]
        )
        for fix in chunk:
            pt = res[fix.idx]
            hit = intersect_rays(anchor_line.start, anchor_line.vector, pt, fix.direction)
            if hit is None:
                raise OffsetError(
                    f"Cannot project point {fix.idx} at ({pt.x}, {pt.y}): "
                    f"direction is parallel to the line between its neighbours"
                )

            t = anchor_line.ray_closest_parameter(hit)
            if t < 0.0 or t > 1.0:
                logger.warning(
                    f"Projected point {fix.idx} lies outside its neighbour span "
                    f"(parameter {t:.3f}), the offset may self-intersect"
                )
            res[fix.idx] = hit

    logger.debug(f"Projected {len(fixes)} collinear points in {len(chunks)} runs")
