"""
Domain, damping and run mode definitions.
"""

from dataclasses import dataclass


@dataclass
class DomainBounds:
    """System domain boundaries."""
    xmin: float
    xmax: float
    ymin: float
    ymax: float

    def __post_init__(self):
        if self.xmin >= self.xmax:
            raise ValueError(f"xmin ({self.xmin}) must be < xmax ({self.xmax})")
        if self.ymin >= self.ymax:
            raise ValueError(f"ymin ({self.ymin}) must be < ymax ({self.ymax})")

    def get_extended_bounds(self, margin: float = 0.0):
        return (
            (self.xmin - margin, self.ymin - margin),
            (self.xmax + margin, self.ymax + margin),
        )


@dataclass
class DampingProperties:
    """Randomized pairwise damping of the elastic body."""
    random_ratio: float = 0.5          # probability that a pair is damped in one call
    physical_viscosity: float = 200.0  # Pa s
    seed: int = 0

    def validate(self):
        if not (0.0 < self.random_ratio <= 1.0):
            raise ValueError(f"random_ratio must be in (0, 1], got {self.random_ratio}")
        if self.physical_viscosity < 0.0:
            raise ValueError("physical_viscosity must be non-negative")
        if self.seed < 0:
            raise ValueError("seed must be non-negative")


@dataclass
class RunModeFlags:
    """Run modes handed over by the case set-up."""
    run_particle_relaxation: bool = False  # only produce the particle distribution
    reload_particles: bool = False         # start from a previously written distribution
    restart_step: int = 0                  # 0: start from the initial condition

    def validate(self):
        if self.restart_step < 0:
            raise ValueError(f"restart_step must be >= 0, got {self.restart_step}")
        if self.restart_step != 0:
            raise ValueError("Restarting from checkpoint files is not supported, use restart_step=0")
