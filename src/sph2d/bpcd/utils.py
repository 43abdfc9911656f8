import math
# =====================================
# Utils
# =====================================


def cell_grid_size(domain_min, domain_max, cell_size: float):
    """Number of cells along x and y covering the bounded domain."""
    nx = max(1, int(math.ceil((domain_max[0] - domain_min[0]) / cell_size)))
    ny = max(1, int(math.ceil((domain_max[1] - domain_min[1]) / cell_size)))
    return nx, ny
