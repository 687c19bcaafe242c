"""Small dense linear-algebra helpers for pose and projection matrices.

Flat 4x4 and square matrices are stored column-major: element ``(row, col)``
sits at index ``row + col * dim``. Nested matrices are lists of rows.
"""

from __future__ import annotations

import os
from typing import Sequence

import numpy as np

from perseus.fileutils import read_floats

Matrix = list[list[float]]


def _square(values: Sequence[float], dim: int) -> np.ndarray:
    if dim <= 0:
        raise ValueError("matrix dimension must be positive")
    flat = np.asarray(values, dtype=float).ravel()
    if flat.size != dim * dim:
        raise ValueError(f"expected {dim * dim} values, got {flat.size}")
    return flat.reshape((dim, dim), order="F")


def _flat(matrix: np.ndarray) -> list[float]:
    return matrix.ravel(order="F").tolist()


def _nested(a: Sequence[Sequence[float]]) -> np.ndarray:
    array = np.asarray(a, dtype=float)
    if array.ndim != 2 or array.shape[0] != array.shape[1] or array.shape[0] == 0:
        raise ValueError("a non-empty square matrix is required")
    return array


def square_matrix_product(a: Sequence[float], b: Sequence[float], dim: int) -> list[float]:
    """Return ``a * b`` for two flat column-major ``dim`` by ``dim`` matrices."""
    return _flat(_square(a, dim) @ _square(b, dim))


def matrix_vector_product(
    matrix: Sequence[Sequence[float]], vector: Sequence[float]
) -> list[float]:
    """Return ``out[i] = sum_j matrix[j][i] * vector[j]``.

    Each inner sequence of ``matrix`` is one column of the operator.
    """
    columns = np.asarray(matrix, dtype=float)
    vec = np.asarray(vector, dtype=float)
    size = vec.size
    if columns.ndim != 2 or columns.shape[0] < size or columns.shape[1] < size:
        raise ValueError("matrix is smaller than the vector")
    return (columns[:size, :size].T @ vec).tolist()


def matrix_vector_product4(matrix: Sequence[float], vector: Sequence[float]) -> list[float]:
    """Multiply a flat column-major 4x4 matrix by a 4-vector and divide by ``w``."""
    vec = np.asarray(vector, dtype=float)
    if vec.size != 4:
        raise ValueError("a 4-vector is required")
    result = _square(matrix, 4) @ vec
    if result[3] == 0:
        raise ValueError("homogeneous coordinate of the result is zero")
    return (result / result[3]).tolist()


def transpose_square_matrix(matrix: Sequence[float], size: int) -> list[float]:
    """Return the transpose of a flat ``size`` by ``size`` matrix."""
    return _flat(_square(matrix, size).T)


def invert_matrix4_pose(matrix: Sequence[float]) -> list[float]:
    """Invert a flat column-major rigid pose matrix cheaply.

    The rotation block is transposed and the translation column is negated;
    the bottom row becomes ``0 0 0 1``.
    """
    src = _square(matrix, 4)
    out = np.zeros((4, 4))
    out[:3, :3] = src[:3, :3].T
    out[:3, 3] = -src[:3, 3]
    out[3, 3] = 1.0
    return _flat(out)


def invert_matrix4(matrix: Sequence[float]) -> list[float]:
    """Return the inverse of a flat 4x4 matrix, in the same layout."""
    src = _square(matrix, 4)
    det = float(np.linalg.det(src))
    if det == 0:
        raise ValueError("matrix is singular")
    return _flat(np.linalg.inv(src))


def matrix_determinant3(a: Sequence[Sequence[float]]) -> float:
    """Return the determinant of a 3x3 matrix given as rows."""
    return (
        a[0][0] * (a[1][1] * a[2][2] - a[2][1] * a[1][2])
        - a[0][1] * (a[1][0] * a[2][2] - a[1][2] * a[2][0])
        + a[0][2] * (a[1][0] * a[2][1] - a[1][1] * a[2][0])
    )


def invert_matrix3(a: Sequence[Sequence[float]]) -> Matrix:
    """Return the cofactors of a 3x3 matrix divided by its determinant.

    This is the transpose of the inverse: row ``i`` of the result is
    column ``i`` of ``a``'s inverse.
    """
    det = matrix_determinant3(a)
    if det == 0:
        raise ValueError("matrix is singular")
    return [
        [
            (a[1][1] * a[2][2] - a[2][1] * a[1][2]) / det,
            -(a[1][0] * a[2][2] - a[1][2] * a[2][0]) / det,
            (a[1][0] * a[2][1] - a[2][0] * a[1][1]) / det,
        ],
        [
            -(a[0][1] * a[2][2] - a[0][2] * a[2][1]) / det,
            (a[0][0] * a[2][2] - a[0][2] * a[2][0]) / det,
            -(a[0][0] * a[2][1] - a[2][0] * a[0][1]) / det,
        ],
        [
            (a[0][1] * a[1][2] - a[0][2] * a[1][1]) / det,
            -(a[0][0] * a[1][2] - a[1][0] * a[0][2]) / det,
            (a[0][0] * a[1][1] - a[1][0] * a[0][1]) / det,
        ],
    ]


def get_minor(src: Sequence[Sequence[float]], row: int, col: int) -> Matrix:
    """Return ``src`` without the given row and column."""
    order = len(src)
    if not 0 <= row < order or not 0 <= col < order:
        raise IndexError("row or column outside the matrix")
    return [
        [value for j, value in enumerate(line) if j != col]
        for i, line in enumerate(src)
        if i != row
    ]


def calc_determinant(mat: Sequence[Sequence[float]]) -> float:
    """Return the determinant by cofactor expansion along the first row."""
    order = len(mat)
    if order == 0:
        raise ValueError("a non-empty square matrix is required")
    if order == 1:
        return float(mat[0][0])
    return sum(
        (-1.0) ** i * float(mat[0][i]) * calc_determinant(get_minor(mat, 0, i))
        for i in range(order)
    )


def invert_matrix(a: Sequence[Sequence[float]]) -> Matrix:
    """Return the inverse of a square matrix given as rows, via the adjugate."""
    _nested(a)
    order = len(a)
    det = calc_determinant(a)
    if det == 0:
        raise ValueError("matrix is singular")
    inv_det = 1.0 / det
    if order == 1:
        return [[inv_det]]
    return [
        [
            (-1.0 if (i + j) % 2 else 1.0) * inv_det * calc_determinant(get_minor(a, j, i))
            for j in range(order)
        ]
        for i in range(order)
    ]


def load_heaviside(path: str | os.PathLike, size: int) -> np.ndarray:
    """Read a Heaviside lookup table of ``size`` values from a text file."""
    return np.asarray(read_floats(path, size), dtype=np.float32)