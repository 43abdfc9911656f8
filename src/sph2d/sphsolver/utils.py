import taichi as ti
#=====================================
# Type Definition
#=====================================
Vector2 = ti.types.vector(2, float)
Vector2i = ti.types.vector(2, int)
Matrix2x2 = ti.types.matrix(2, 2, float)
SPHMatrix = Matrix2x2

TinyReal: float = 1e-15  # Guards divisions by vanishing norms


@ti.func
def Identity2x2() -> Matrix2x2:
    return Matrix2x2([[1.0, 0.0], [0.0, 1.0]])


@ti.func
def Zero2x2() -> Matrix2x2:
    return Matrix2x2([[0.0, 0.0], [0.0, 0.0]])


# Second Piola-Kirchhoff stress from the deformation gradient
# References:
# https://en.wikipedia.org/wiki/Hyperelastic_material
@ti.func
def stress_PK2_linear(F: Matrix2x2, lambda0: float, G0: float) -> Matrix2x2:
    """Saint-Venant-Kirchhoff with Green-Lagrange strain."""
    I = Identity2x2()
    E = 0.5 * (F.transpose() @ F - I)
    return lambda0 * E.trace() * I + 2.0 * G0 * E


@ti.func
def stress_PK2_neohookean(F: Matrix2x2, lambda0: float, G0: float) -> Matrix2x2:
    I = Identity2x2()
    C_inv = (F.transpose() @ F).inverse()
    J = F.determinant()
    return G0 * (I - C_inv) + lambda0 * ti.log(J) * C_inv


# Counter-based hash, after the integer finalizer by Thomas Mueller
# https://stackoverflow.com/questions/664014/what-integer-hash-function-are-good-that-accepts-an-integer-hash-key
@ti.func
def hash_uniform(seed: int, counter: int, index: int) -> float:
    """Uniform number in [0, 1) determined only by (seed, counter, index)."""
    x = ti.cast(index, ti.u32)
    x ^= ti.cast(counter, ti.u32) * ti.cast(0x27d4eb2d, ti.u32)
    x ^= ti.cast(seed, ti.u32) * ti.cast(0x165667b1, ti.u32)
    x = (ti.bit_shr(x, 16) ^ x) * ti.cast(0x45d9f3b, ti.u32)
    x = (ti.bit_shr(x, 16) ^ x) * ti.cast(0x45d9f3b, ti.u32)
    x = ti.bit_shr(x, 16) ^ x
    return ti.cast(x & ti.cast(0xffffff, ti.u32), float) / 16777216.0
