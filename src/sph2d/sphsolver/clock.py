"""
Simulated time bookkeeping threaded through the main loop.
"""

from dataclasses import dataclass


@dataclass
class SimulationClock:
    """Current time, sub-step counter and the step size for the next sub-step."""
    output_interval: float
    time: float = 0.0
    step: int = 0
    dt: float = 0.0
    next_output_time: float = 0.0

    def __post_init__(self):
        if self.output_interval <= 0:
            raise ValueError(f"Output interval must be positive, got {self.output_interval}")
        if self.next_output_time <= self.time:
            self.next_output_time = self.time + self.output_interval

    def advance(self, dt: float):
        self.time += dt
        self.step += 1

    def output_due(self) -> bool:
        return self.time >= self.next_output_time

    def schedule_next_output(self):
        self.next_output_time += self.output_interval
