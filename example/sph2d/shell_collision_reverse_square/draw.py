'''
Plot the snapshots and the rigid box trajectory of shell_collision_reverse_square.py
'''
import os
import sys

sys.path.append(os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(os.path.dirname(
    os.path.abspath(__file__))))), "src"))

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from sph2d.process import plot_snapshots, rigid_body_history

output_dir = "output"
frame_dir = os.path.join(output_dir, "frames")


def main():
    files = [os.path.join(output_dir, f"{name}.p4p") for name in ("FreeBall", "Wall")]
    frames = plot_snapshots(files, frame_dir, marker_size=0.5, color_by_density=True)
    print(f"{len(frames)} frames written to {frame_dir}")

    history = rigid_body_history(os.path.join(output_dir, "rigid_bodies.dat"))
    fig, (ax_x, ax_v) = plt.subplots(2, 1, figsize=(6, 6), sharex=True)
    ax_x.plot(history[:, 1], history[:, 2], color="#4C72B0")
    ax_x.set_ylabel("mass centre x")
    ax_v.plot(history[:, 1], history[:, 5], color="#DD8452")
    ax_v.set_ylabel("velocity x")
    ax_v.set_xlabel("time")
    fig.tight_layout()
    fig.savefig(os.path.join(output_dir, "rigid_box.png"), dpi=150)
    plt.close(fig)


if __name__ == '__main__':
    main()
