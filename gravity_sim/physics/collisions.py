"""Pairwise collision detection and the greedy merge pass."""

import logging
from typing import Hashable, List, Sequence, Tuple

from gravity_sim.physics.body import Body
from gravity_sim.physics.forces import are_colliding, resolve_collision

logger = logging.getLogger(__name__)


def find_colliding_pairs(bodies: Sequence[Body]) -> List[Tuple[int, int]]:
    """All overlapping unordered index pairs (i, j) with i < j, in scan order."""
    pairs = []
    for i in range(len(bodies)):
        for j in range(i + 1, len(bodies)):
            if are_colliding(bodies[i], bodies[j]):
                pairs.append((i, j))
    return pairs


def detect_collisions(bodies: Sequence[Body]) -> List[Tuple[Hashable, Hashable]]:
    """Ids of every colliding pair."""
    return [(bodies[i].id, bodies[j].id) for i, j in find_colliding_pairs(bodies)]


def merge_collisions(bodies: Sequence[Body]) -> Tuple[List[Body], List[Tuple[Hashable, Hashable, Hashable]]]:
    """Replace every colliding pair with its merged body.

    Pairs are processed from the highest index downward (stable for equal
    maxima). The merged body takes the slot of the lower index. A body that
    was already merged this pass is skipped for any further pair it is part
    of, so chains of overlaps merge greedily, first pair wins.

    Args:
        bodies: Post-integration body snapshot

    Returns:
        Tuple of (new_bodies, merges) where merges lists
        (surviving_id, id_a, id_b) per merge, in processing order
    """
    pairs = find_colliding_pairs(bodies)
    if not pairs:
        return list(bodies), []

    slots = list(bodies)
    consumed = set()
    merges = []
    for i, j in sorted(pairs, key=lambda pair: max(pair), reverse=True):
        if i in consumed or j in consumed:
            continue
        merged = resolve_collision(slots[i], slots[j])
        merges.append((merged.id, slots[i].id, slots[j].id))
        logger.info("Merged %r and %r into %r", slots[i].id, slots[j].id, merged.id)
        slots[min(i, j)] = merged
        slots[max(i, j)] = None
        consumed.update((i, j))

    return [body for body in slots if body is not None], merges
