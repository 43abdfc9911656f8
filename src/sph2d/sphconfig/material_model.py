'''
Elastic solid material models
'''
import math
from dataclasses import dataclass
from abc import ABC, abstractmethod


@dataclass
class ElasticSolidConfig(ABC):
    """Base class for elastic solid materials."""
    rho0: float = 1.0              # reference density
    youngs_modulus: float = 5e4    # Pa
    poisson_ratio: float = 0.45

    @abstractmethod
    def get_model_name(self) -> str:
        pass

    def validate(self):
        if self.rho0 <= 0:
            raise ValueError(f"Reference density must be positive, got {self.rho0}")
        if self.youngs_modulus <= 0:
            raise ValueError(f"Young's modulus must be positive, got {self.youngs_modulus}")
        if not (0.0 <= self.poisson_ratio < 0.5):
            raise ValueError(f"Poisson ratio must be in [0, 0.5), got {self.poisson_ratio}")

    @property
    def bulk_modulus(self) -> float:
        return self.youngs_modulus / 3.0 / (1.0 - 2.0 * self.poisson_ratio)

    @property
    def shear_modulus(self) -> float:
        return 0.5 * self.youngs_modulus / (1.0 + self.poisson_ratio)

    @property
    def lambda0(self) -> float:
        nu = self.poisson_ratio
        return nu * self.youngs_modulus / (1.0 + nu) / (1.0 - 2.0 * nu)

    @property
    def sound_speed(self) -> float:
        """Reference sound speed c0 = sqrt(K / rho0)."""
        return math.sqrt(self.bulk_modulus / self.rho0)

    @property
    def contact_stiffness(self) -> float:
        """Pressure per unit contact density, rho0 * c0^2."""
        return self.rho0 * self.sound_speed ** 2


@dataclass
class LinearElasticSolid(ElasticSolidConfig):
    """Saint-Venant-Kirchhoff: S = lambda tr(E) I + 2 G E."""

    def get_model_name(self) -> str:
        return "linear"


@dataclass
class NeoHookeanSolid(ElasticSolidConfig):
    """Compressible neo-Hookean: S = G (I - C^-1) + lambda ln(J) C^-1."""

    def get_model_name(self) -> str:
        return "neohookean"
