'''
Plot particle snapshots written by BodyStatesRecording.
'''
import os
from typing import List

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from .generate import read_particle_blocks

background_color = "#F8FAFC"
body_colors = ["#4C72B0", "#DD8452", "#55A868", "#C44E52"]


def plot_snapshots(p4p_files: List[str], output_dir: str, marker_size: float = 1.0,
                   color_by_density: bool = False):
    """
    Write one PNG per snapshot with all bodies overlaid.

    Args:
        p4p_files: Particle files, one per body, with the same snapshot times
        output_dir: Folder for frame_XXXX.png
        marker_size: Scatter marker size in points^2
        color_by_density: Colour particles by contact density instead of body

    Returns:
        List of written image paths.
    """
    os.makedirs(output_dir, exist_ok=True)
    all_blocks = [read_particle_blocks(f) for f in p4p_files]
    n_frames = min(len(blocks) for blocks in all_blocks) if all_blocks else 0

    written = []
    for frame in range(n_frames):
        fig, ax = plt.subplots(figsize=(6, 6))
        fig.patch.set_facecolor(background_color)
        ax.set_facecolor(background_color)
        t = all_blocks[0][frame][0]
        for b, blocks in enumerate(all_blocks):
            data = blocks[frame][1]
            if data.shape[0] == 0:
                continue
            if color_by_density:
                ax.scatter(data[:, 4], data[:, 5], s=marker_size, c=data[:, 10],
                           cmap="plasma", vmin=0.0)
            else:
                ax.scatter(data[:, 4], data[:, 5], s=marker_size,
                           color=body_colors[b % len(body_colors)])
        ax.set_aspect("equal")
        ax.set_title(f"t = {t:.4f}")
        file_name = os.path.join(output_dir, f"frame_{frame:04d}.png")
        fig.savefig(file_name, dpi=150)
        plt.close(fig)
        written.append(file_name)
    return written


def rigid_body_history(file_name: str, body: int = 0) -> np.ndarray:
    """Rows of (step, time, x, y, angle, vx, vy, omega) for one rigid body."""
    data = np.loadtxt(file_name, skiprows=1, ndmin=2)
    data = data[data[:, 2] == body]
    return np.delete(data, 2, axis=1)
