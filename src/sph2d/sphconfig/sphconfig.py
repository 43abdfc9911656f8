from typing import Optional, Tuple
from .types import DomainBounds, DampingProperties, RunModeFlags


class SPHSolverConfig:
    """Configuration for the coupled SPH / rigid body solver."""

    def __init__(self,
                 domain: DomainBounds,
                 resolution: float,
                 end_time: float,
                 output_interval: float,
                 gravity: Tuple[float, float] = (0.0, 0.0),
                 run_mode: Optional[RunModeFlags] = None):
        if resolution <= 0:
            raise ValueError(f"Resolution must be positive, got {resolution}")
        if end_time <= 0:
            raise ValueError(f"End time must be positive, got {end_time}")
        if output_interval <= 0 or output_interval > end_time:
            raise ValueError(f"Output interval must be in (0, end_time], got {output_interval}")

        self.domain = domain
        self.resolution = resolution
        self.end_time = end_time
        self.output_interval = output_interval
        self.gravity = (float(gravity[0]), float(gravity[1]))
        self.run_mode = run_mode if run_mode is not None else RunModeFlags()
        self.run_mode.validate()

        # Numerical parameters
        self.smoothing_length_ratio = 1.3  # h / dp
        self.acoustic_cfl = 0.6
        self.max_neighbors = 48
        self.rigid_accuracy = 1e-3
        self.print_interval = 100          # sub-steps between progress lines, 0 disables
        self.output_dir = "output"

        self.damping = DampingProperties()

        self.domain_min, self.domain_max = domain.get_extended_bounds(self.cutoff_radius)

    @property
    def smoothing_length(self) -> float:
        return self.smoothing_length_ratio * self.resolution

    @property
    def cutoff_radius(self) -> float:
        return 2.0 * self.smoothing_length

    def set_numerical_parameters(self, **kwargs) -> 'SPHSolverConfig':
        allowed = ("smoothing_length_ratio", "acoustic_cfl", "max_neighbors",
                   "rigid_accuracy", "print_interval", "output_dir")
        for key, value in kwargs.items():
            if key not in allowed:
                raise ValueError(f"Unknown numerical parameter: {key}")
            setattr(self, key, value)
        self.validate()
        self.domain_min, self.domain_max = self.domain.get_extended_bounds(self.cutoff_radius)
        return self

    def set_damping_properties(self, **kwargs) -> 'SPHSolverConfig':
        for key, value in kwargs.items():
            if hasattr(self.damping, key):
                setattr(self.damping, key, value)
            else:
                raise ValueError(f"Unknown damping property: {key}")
        self.damping.validate()
        return self

    def validate(self):
        if self.smoothing_length_ratio <= 0:
            raise ValueError("smoothing_length_ratio must be positive")
        if not (0.0 < self.acoustic_cfl <= 1.0):
            raise ValueError(f"acoustic_cfl must be in (0, 1], got {self.acoustic_cfl}")
        if self.max_neighbors <= 0:
            raise ValueError("max_neighbors must be positive")
        if self.rigid_accuracy <= 0:
            raise ValueError("rigid_accuracy must be positive")
        if self.print_interval < 0:
            raise ValueError("print_interval must be >= 0")
        self.damping.validate()
        self.run_mode.validate()

    def summary(self) -> str:
        """Return a human-readable summary of the configuration."""
        summary = f"""
SPH Solver Configuration:
=========================
Domain: [{self.domain.xmin}, {self.domain.xmax}] × [{self.domain.ymin}, {self.domain.ymax}]
Resolution: {self.resolution}
Smoothing length: {self.smoothing_length} (cutoff {self.cutoff_radius})
End time: {self.end_time}
Output interval: {self.output_interval}
Gravity: ({self.gravity[0]}, {self.gravity[1]})
Acoustic CFL: {self.acoustic_cfl}
Max neighbors: {self.max_neighbors}
Rigid integrator accuracy: {self.rigid_accuracy}

Damping:
- Random ratio: {self.damping.random_ratio}
- Physical viscosity: {self.damping.physical_viscosity}
- Seed: {self.damping.seed}

Run mode:
- Particle relaxation only: {self.run_mode.run_particle_relaxation}
- Reload particles: {self.run_mode.reload_particles}
- Restart step: {self.run_mode.restart_step}
"""
        return summary
