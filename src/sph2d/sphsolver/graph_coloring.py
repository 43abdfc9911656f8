"""
Edge colouring of the particle pair graph.

Pairs sharing a particle get different colours, so all pairs of one colour
can be updated in parallel without write conflicts. The colouring is a
deterministic greedy pass over the edges ordered by decreasing endpoint
degree; it only depends on the pair list.
"""

import numpy as np


def canonicalize_pairs(pairs) -> np.ndarray:
    """Sort pair endpoints, drop self pairs and duplicates."""
    pairs = np.asarray(pairs, dtype=np.int32).reshape(-1, 2)
    if pairs.size == 0:
        return np.empty((0, 2), dtype=np.int32)
    pairs = np.sort(pairs, axis=1)
    pairs = pairs[pairs[:, 0] != pairs[:, 1]]
    if pairs.size == 0:
        return np.empty((0, 2), dtype=np.int32)
    return np.unique(pairs, axis=0).astype(np.int32)


def color_pairs(pairs: np.ndarray, particle_count: int) -> np.ndarray:
    """
    Greedy edge colouring.

    Args:
        pairs: Canonical pairs, shape (n_pairs, 2)
        particle_count: Number of vertices of the graph

    Returns:
        Colour of every pair, shape (n_pairs,), colours numbered from 0.
    """
    n_pairs = pairs.shape[0]
    colors = np.full(n_pairs, -1, dtype=np.int32)
    if n_pairs == 0:
        return colors

    degree = np.bincount(pairs.ravel(), minlength=particle_count)
    # Stable sort keeps the lexicographic pair order among equal degrees
    order = np.argsort(-(degree[pairs[:, 0]] + degree[pairs[:, 1]]), kind="stable")

    used = [set() for _ in range(particle_count)]
    for e in order:
        i, j = pairs[e]
        taken = used[i] | used[j]
        c = 0
        while c in taken:
            c += 1
        colors[e] = c
        used[i].add(c)
        used[j].add(c)
    return colors


def validate_pair_coloring(pairs: np.ndarray, colors: np.ndarray) -> bool:
    """True when no particle appears twice within one colour."""
    for c in np.unique(colors):
        members = pairs[colors == c].ravel()
        if np.unique(members).size != members.size:
            return False
    return True


def convert_to_color_groups(colors: np.ndarray):
    """
    Group pair indices by colour.

    Returns:
        (group_pairs, group_offsets): pair indices ordered by colour, and the
        offsets delimiting colour c as group_pairs[offsets[c]:offsets[c + 1]].
    """
    if colors.size == 0:
        return np.empty(0, dtype=np.int32), np.zeros(1, dtype=np.int64)
    num_colors = int(colors.max()) + 1
    group_sizes = np.bincount(colors, minlength=num_colors)
    group_offsets = np.concatenate([np.array([0]), np.cumsum(group_sizes)])
    group_pairs = np.argsort(colors, kind="stable").astype(np.int32)
    return group_pairs, group_offsets
