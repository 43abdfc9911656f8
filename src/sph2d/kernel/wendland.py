"""
Wendland C2 smoothing kernel in two dimensions.

W(r) = 7 / (4 pi h^2) (1 - q/2)^4 (1 + 2q),  q = r / h,  support 2h.
"""

import math

import taichi as ti


@ti.data_oriented
class WendlandC2Kernel:

    def __init__(self, smoothing_length: float):
        if smoothing_length <= 0:
            raise ValueError(f"Smoothing length must be positive, got {smoothing_length}")
        self.h = smoothing_length
        self.cutoff = 2.0 * smoothing_length
        self.factor_W = 7.0 / (4.0 * math.pi * smoothing_length ** 2)
        self.factor_dW = self.factor_W / smoothing_length

    @ti.func
    def W(self, r):
        q = r / self.h
        w = 0.0
        if q < 2.0:
            w = self.factor_W * (1.0 - 0.5 * q) ** 4 * (1.0 + 2.0 * q)
        return w

    @ti.func
    def dW(self, r):
        """Radial derivative dW/dr, never positive."""
        q = r / self.h
        dw = 0.0
        if q < 2.0:
            dw = -5.0 * self.factor_dW * q * (1.0 - 0.5 * q) ** 3
        return dw

    def W_host(self, r: float) -> float:
        q = r / self.h
        if q >= 2.0:
            return 0.0
        return self.factor_W * (1.0 - 0.5 * q) ** 4 * (1.0 + 2.0 * q)

    def dW_host(self, r: float) -> float:
        q = r / self.h
        if q >= 2.0:
            return 0.0
        return -5.0 * self.factor_dW * q * (1.0 - 0.5 * q) ** 3
