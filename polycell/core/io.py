"""Mesh file export.

Writes the VTK XML ``UnstructuredGrid`` format (``.vtu``, ASCII) readable by
ParaView and VisIt. Inputs follow the package's array convention:

    points: (N, 2) or (N, 3) float array
    triangles: (M, 3) int array
"""
from __future__ import annotations

import warnings
from typing import Dict, Optional

import numpy as np

from .constants import VTK_TRIANGLE

__all__ = ['write_vtu', 'vtk_type_name']

_VTK_TYPES = {
    ('f', 4): 'Float32', ('f', 8): 'Float64',
    ('i', 1): 'Int8', ('i', 2): 'Int16', ('i', 4): 'Int32', ('i', 8): 'Int64',
    ('u', 1): 'UInt8', ('u', 2): 'UInt16', ('u', 4): 'UInt32', ('u', 8): 'UInt64',
}


def vtk_type_name(dtype) -> Optional[str]:
    """VTK XML DataArray type for a numpy dtype, or None if unsupported."""
    dtype = np.dtype(dtype)
    if dtype.kind == 'b':
        return 'UInt8'
    return _VTK_TYPES.get((dtype.kind, dtype.itemsize))


def _fmt(value, kind: str) -> str:
    if kind == 'f':
        return repr(float(value))
    return str(int(value))


def _write_array(f, name: str, data: np.ndarray, components: int = 1) -> None:
    vtk_type = vtk_type_name(data.dtype)
    f.write(f'        <DataArray type="{vtk_type}" Name="{name}"')
    if components != 1:
        f.write(f' NumberOfComponents="{components}"')
    f.write(' format="ascii">\n          ')
    kind = 'f' if data.dtype.kind == 'f' else 'i'
    f.write(' '.join(_fmt(v, kind) for v in data.ravel()))
    f.write('\n        </DataArray>\n')


def write_vtu(filepath: str,
              points: np.ndarray,
              triangles: np.ndarray,
              cell_data: Optional[Dict[str, np.ndarray]] = None) -> None:
    """Write a 2D triangular mesh as a VTK XML unstructured grid (ASCII).

    Parameters
    ----------
    filepath : str
        Output ``.vtu`` path.
    points : (N, 2) or (N, 3) ndarray
        Vertex coordinates. If 2D, z=0 is added.
    triangles : (M, 3) ndarray
        Triangle connectivity (0-indexed).
    cell_data : dict, optional
        Per-cell scalar arrays of shape (M,). The VTK type follows the
        array dtype; arrays of another shape or an unsupported dtype are
        skipped with a warning.

    Examples
    --------
    >>> write_vtu('domain.vtu', points, triangles,
    ...           cell_data={'CellIndex': np.arange(len(triangles), dtype=np.uint32)})
    """
    points = np.asarray(points, dtype=np.float64)
    triangles = np.asarray(triangles)

    if points.ndim != 2 or points.shape[1] not in (2, 3):
        raise ValueError(f"points must be (N, 2) or (N, 3), got shape {points.shape}")
    if triangles.size == 0:
        triangles = triangles.reshape(0, 3)
    if triangles.ndim != 2 or triangles.shape[1] != 3:
        raise ValueError(f"triangles must be (M, 3), got shape {triangles.shape}")
    triangles = triangles.astype(np.int32)
    if triangles.size and (triangles.min() < 0 or triangles.max() >= len(points)):
        raise ValueError("triangle indices out of range of points")

    if points.shape[1] == 2:
        points_3d = np.column_stack([points, np.zeros(len(points))])
    else:
        points_3d = points

    num_points = len(points_3d)
    num_cells = len(triangles)
    offsets = np.arange(1, num_cells + 1, dtype=np.int32) * 3
    types = np.full(num_cells, VTK_TRIANGLE, dtype=np.uint8)

    with open(filepath, 'w') as f:
        f.write('<?xml version="1.0"?>\n')
        f.write('<VTKFile type="UnstructuredGrid" version="0.1" byte_order="LittleEndian">\n')
        f.write('  <UnstructuredGrid>\n')
        f.write(f'    <Piece NumberOfPoints="{num_points}" NumberOfCells="{num_cells}">\n')

        f.write('      <Points>\n')
        _write_array(f, 'Points', points_3d, components=3)
        f.write('      </Points>\n')

        f.write('      <Cells>\n')
        _write_array(f, 'connectivity', triangles)
        _write_array(f, 'offsets', offsets)
        _write_array(f, 'types', types)
        f.write('      </Cells>\n')

        if cell_data:
            f.write('      <CellData>\n')
            for name, data in cell_data.items():
                data = np.asarray(data)
                if data.shape != (num_cells,):
                    warnings.warn(f"Skipping cell_data['{name}'] with shape {data.shape}, expected ({num_cells},)")
                    continue
                if vtk_type_name(data.dtype) is None:
                    warnings.warn(f"Skipping cell_data['{name}'] with unsupported dtype {data.dtype}")
                    continue
                _write_array(f, name, data)
            f.write('      </CellData>\n')

        f.write('    </Piece>\n')
        f.write('  </UnstructuredGrid>\n')
        f.write('</VTKFile>\n')
