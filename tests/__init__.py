import taichi as ti

# One Taichi context for the whole test session
ti.init(arch=ti.cpu, default_fp=ti.f64, random_seed=0)
