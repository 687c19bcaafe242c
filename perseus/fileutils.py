"""Reading and writing of plain-text numeric array files."""

from __future__ import annotations

import numbers
import os
from pathlib import Path
from typing import Iterator, Sequence

ARRAY_FILE_HEADER = "% PerseusLib 2D double array file"

PathLike = str | os.PathLike


def read_text(path: PathLike) -> str:
    """Return the whole content of a text file."""
    return Path(path).read_text(encoding="utf-8")


def write_text(path: PathLike, text: str) -> None:
    """Write ``text`` to a file, replacing what was there."""
    with open(path, "w", encoding="utf-8") as handle:
        handle.write(text)


def _float(value) -> str:
    return f"{float(value):f}"


def _number(value) -> str:
    if isinstance(value, numbers.Integral):
        return str(int(value))
    return _float(value)


def _rows(values: Sequence[float], m: int, n: int) -> list[Sequence[float]]:
    if m < 0 or n < 0:
        raise ValueError("dimensions must not be negative")
    if len(values) < m * n:
        raise ValueError(f"expected {m * n} values, got {len(values)}")
    return [values[i * n:(i + 1) * n] for i in range(m)]


def _array_body(values: Sequence[float], m: int, n: int, row_end: str) -> str:
    lines = [ARRAY_FILE_HEADER, f"m={m}", f"n={n}"]
    text = "\n".join(lines) + "\n"
    for row in _rows(values, m, n):
        text += "".join(f"{_float(v)} " for v in row) + row_end
    return text


def write_array_file(path: PathLike, values: Sequence[float], m: int, n: int) -> None:
    """Write an ``m`` by ``n`` row-major array with its dimensions."""
    write_text(path, _array_body(values, m, n, "\n"))


def _tokens(path: PathLike) -> Iterator[str]:
    lines = read_text(path).splitlines()
    if not lines or not lines[0].startswith("%"):
        raise ValueError("missing array file header")
    for line in lines[1:]:
        yield from line.split()


def _header_value(tokens: Iterator[str], key: str) -> int:
    token = next(tokens, None)
    prefix = key + "="
    if token is None or not token.startswith(prefix):
        raise ValueError(f"expected '{prefix}' entry")
    return int(token[len(prefix):])


def _take_floats(tokens: Iterator[str], count: int) -> list[float]:
    result: list[float] = []
    while len(result) < count:
        token = next(tokens, None)
        if token is None:
            raise ValueError(f"expected {count} values, found {len(result)}")
        if token == ";":
            continue
        result.append(float(token.rstrip(";")))
    return result


def read_array_file(path: PathLike) -> tuple[list[float], int, int]:
    """Read a file written by :func:`write_array_file` as ``(values, m, n)``."""
    tokens = _tokens(path)
    m = _header_value(tokens, "m")
    n = _header_value(tokens, "n")
    return _take_floats(tokens, m * n), m, n


def write_array_with_vector(
    path: PathLike, values: Sequence[float], m: int, n: int, vector: Sequence[float]
) -> None:
    """Write an ``m`` by ``n`` array followed by a vector."""
    text = _array_body(values, m, n, ";\n")
    text += f"v={len(vector)}\n"
    text += "".join(f"{_float(v)} " for v in vector)
    write_text(path, text)


def read_array_with_vector(path: PathLike) -> tuple[list[float], int, int, list[float]]:
    """Read a file written by :func:`write_array_with_vector`.

    Returns ``(values, m, n, vector)``.
    """
    tokens = _tokens(path)
    m = _header_value(tokens, "m")
    n = _header_value(tokens, "n")
    values = _take_floats(tokens, m * n)
    v = _header_value(tokens, "v")
    return values, m, n, _take_floats(tokens, v)


def write_named_rows(path: PathLike, rows: Sequence[Sequence[float]], name: str) -> None:
    """Write a list of rows as a named matrix assignment."""
    if not rows:
        raise ValueError("at least one row is required")
    parts = [
        f"height_{name}={len(rows)};\n",
        f"width_{name}={len(rows[0])};\n",
        f"{name}=[\n",
    ]
    last = len(rows) - 1
    for index, row in enumerate(rows):
        parts.append("".join(f"{_number(v)} " for v in row))
        parts.append(";\n" if index < last else "\n")
    parts.append("];")
    write_text(path, "".join(parts))


def write_named_flat_matrix(
    path: PathLike, values: Sequence[float], m: int, n: int, name: str
) -> None:
    """Write a flat ``m`` by ``n`` array as a named matrix, then transpose it."""
    rows = _rows(values, m, n)
    parts = [f"width_{name}={m};\n", f"height_{name}={n};\n", f"{name}=[\n"]
    for index, row in enumerate(rows):
        parts.append("".join(f"{_float(v)} " for v in row))
        parts.append(";\n" if index < m - 1 else "\n")
    parts.append("];\n")
    parts.append(f"{name} = {name}';\n")
    write_text(path, "".join(parts))


def write_named_vector(path: PathLike, values: Sequence[float], name: str) -> None:
    """Write a vector as a named row assignment."""
    items = [f"{_number(v)} " for v in values]
    body = " ".join(items)
    write_text(path, f"width_{name}={len(values)};\n{name}=[{body}];")


def write_object_matrix(path: PathLike, rows: Sequence[Sequence[float]], name: str) -> None:
    """Write rows as a named matrix with ``<name>_width`` and ``<name>_height`` entries."""
    m = len(rows)
    n = len(rows[0]) if rows else 0
    parts = [f"{name}_width={m}\n", f"{name}_height={n}\n", f"{name}=[\n"]
    for index, row in enumerate(rows):
        parts.append("".join(f"{_float(v)} " for v in row))
        if index != m - 1:
            parts.append(";")
    parts.append("];\n")
    write_text(path, "".join(parts))


def read_floats(path: PathLike, count: int) -> list[float]:
    """Read the first ``count`` whitespace-separated numbers of a file."""
    tokens = read_text(path).split()
    if len(tokens) < count:
        raise ValueError(f"expected {count} values, found {len(tokens)}")
    return [float(token) for token in tokens[:count]]