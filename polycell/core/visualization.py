"""Plotting helpers for inspecting a meshed domain."""
from __future__ import annotations

import os as _os
import matplotlib as _mpl
# Ensure a non-interactive backend in headless environments before importing pyplot
if not _os.environ.get('MPLBACKEND'):
    _mpl.use('Agg')
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.collections import PolyCollection

from .logging_utils import get_logger

logger = get_logger('polycell.viz')

__all__ = ['plot_domain']


def plot_domain(domain, outname="domain.png", show_exterior=True, show_centers=True,
                label_cells=False):
    """Draw a domain's cells to an image file.

    Args:
        domain: a built ``Domain``
        outname: output image path
        show_exterior: draw the dropped candidate triangles dashed in grey
        show_centers: scatter the cell centroids
        label_cells: write each cell's index at its centroid
    """
    pts = domain.points()
    fig, ax = plt.subplots(figsize=(6, 6))

    if show_exterior:
        ext = [pts[list(t.indices)] for t in domain.exterior_candidates()]
        if ext:
            ax.add_collection(PolyCollection(ext, facecolors='none', edgecolors=(0.6, 0.6, 0.6),
                                             linestyles='dashed', linewidths=0.8))

    tris = domain.cell_triangles()
    if len(tris):
        colors = [(0.95, 0.75, 0.45) if c.is_boundary else (0.55, 0.75, 0.95) for c in domain.cells]
        ax.add_collection(PolyCollection(pts[tris], facecolors=colors, edgecolors='k', linewidths=0.8))
    else:
        ax.set_title('empty mesh (border only)')

    border = np.vstack([pts[:domain.n_border], pts[:1]])
    ax.plot(border[:, 0], border[:, 1], color=(0.85, 0.2, 0.2), linewidth=1.8)

    if show_centers and domain.cells:
        centers = np.asarray([c.center_xy for c in domain.cells])
        ax.scatter(centers[:, 0], centers[:, 1], s=8, color='black', zorder=3)
        if label_cells:
            for i, (x, y) in enumerate(centers):
                ax.annotate(str(i), (x, y), fontsize=7, ha='center', va='bottom')

    ax.autoscale_view()
    ax.set_aspect('equal')
    fig.savefig(outname, dpi=150)
    plt.close(fig)
    logger.debug("saved domain plot to %s", outname)
