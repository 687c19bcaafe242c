"""Parameter objects for objects, views, step sizes and iterations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from perseus.defines import IterationTarget

MAX_OBJECT_COUNT = 20
MAX_VIEW_COUNT = 10
MAX_ITER_COUNT = 160


@dataclass
class StepSize3D:
    """Step sizes for rotation and the three translation axes."""

    r: float = 0.0
    t_x: float = 0.0
    t_y: float = 0.0
    t_z: float = 0.0

    def set_from(self, r: float, t_x: float, t_y: float, t_z: float) -> None:
        """Set all four step sizes."""
        self.r = r
        self.t_x = t_x
        self.t_y = t_y
        self.t_z = t_z

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> "StepSize3D":
        """Build from a sequence ordered ``r, t_x, t_y, t_z``."""
        if len(values) < 4:
            raise ValueError("a step size needs four values: r, t_x, t_y, t_z")
        r, t_x, t_y, t_z = values[:4]
        return cls(r, t_x, t_y, t_z)


@dataclass
class View3DParams:
    """Clipping planes and depth-buffer offset of a view."""

    z_far: float = 50.0
    z_near: float = 0.01
    z_buffer_offset: float = 0.0001


@dataclass
class Object3DParams:
    """Optimisation and histogram settings of a tracked object."""

    number_of_optimized_variables: int = 7
    no_var_bin_histograms: int = 4
    no_var_bin_histogram_bins: list[int] = field(default_factory=lambda: [8, 16, 32, 64])


@dataclass
class IterationConfiguration:
    """Which views and objects are optimised, and how, over the iterations."""

    iter_count: int = 1
    width: int = 0
    height: int = 0
    level_set_band_size: int = 0
    iter_view_count: int = 0
    iter_object_count: list[int] = field(default_factory=lambda: [0] * MAX_VIEW_COUNT)
    iter_object_ids: list[list[int]] = field(
        default_factory=lambda: [[0] * MAX_OBJECT_COUNT for _ in range(MAX_VIEW_COUNT)]
    )
    iter_view_ids: list[int] = field(default_factory=lambda: [0] * MAX_VIEW_COUNT)
    iter_target: list[IterationTarget] = field(
        default_factory=lambda: [IterationTarget.BOTH] * MAX_ITER_COUNT
    )
    use_cuda_render: bool = False
    use_cuda_ef: bool = False