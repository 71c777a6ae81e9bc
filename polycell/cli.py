"""Command line entry point: mesh a border polygon and export it.

Usage::

    python -m polycell                       # built-in demo border
    python -m polycell --rect 0 0 2 1 --out rect.vtu
    python -m polycell --border border.json --plot mesh.png

``border.json`` holds a list of ``[x, y]`` pairs.
"""
from __future__ import annotations

import argparse
import json
from typing import List, Optional, Sequence

from .core.config import MeshConfig
from .core.domain import Domain
from .core.errors import InvalidBorderError, TriangulationError
from .core.logging_utils import LOG_LEVELS, configure_logging, get_logger

logger = get_logger('polycell.cli')

# Concave 7-vertex demo polygon with a notch at (-3.90, 2.82)
DEMO_BORDER: List[tuple] = [
    (-9.30, 7.58),
    (6.72, 7.62),
    (7.00, -1.00),
    (-1.58, -7.18),
    (-10.50, -4.18),
    (-5.14, -1.24),
    (-3.90, 2.82),
]


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog='polycell',
                                 description='Triangulate a simple polygon and export the interior mesh as VTU')
    src = ap.add_mutually_exclusive_group()
    src.add_argument('--border', metavar='FILE', help='JSON file with a list of [x, y] border vertices')
    src.add_argument('--rect', nargs=4, type=float, metavar=('X0', 'Y0', 'X1', 'Y1'),
                     help='mesh the rectangle spanned by (X0, Y0) and (X1, Y1)')
    ap.add_argument('--out', default='domain.vtu', help='output .vtu path (default: domain.vtu)')
    ap.add_argument('--include-exterior', action='store_true',
                    help='export every candidate triangle with an Interior flag instead of the cells only')
    ap.add_argument('--plot', metavar='PNG', default=None, help='also save a PNG plot of the mesh')
    ap.add_argument('--on-degenerate', choices=('skip', 'raise'), default='skip',
                    help='policy for zero-area candidate triangles')
    ap.add_argument('--log-level', default='INFO', type=str.upper, choices=LOG_LEVELS,
                    help='logging level (default: INFO)')
    return ap


def load_border(path: str) -> List[tuple]:
    with open(path, 'r') as f:
        data = json.load(f)
    return [tuple(p) for p in data]


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    cfg = MeshConfig(on_degenerate=args.on_degenerate)

    try:
        if args.rect:
            x0, y0, x1, y1 = args.rect
            domain = Domain.from_rect((x0, y0), (x1, y1), config=cfg)
        else:
            border = load_border(args.border) if args.border else DEMO_BORDER
            domain = Domain.from_border(border, config=cfg)
    except (InvalidBorderError, TriangulationError) as e:
        logger.error("cannot mesh border: %s", e)
        return 2

    domain.to_vtu(args.out, include_exterior=args.include_exterior)
    logger.info("wrote %s (%d cells, %d border vertices)", args.out, domain.n_cells, domain.n_border)

    if args.plot:
        from .core.visualization import plot_domain
        plot_domain(domain, args.plot)
        logger.info("wrote %s", args.plot)
    return 0
