# GPLv3 License
#
# Copyright (C) 2020 Ubisoft
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 2 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""
Geometry definitions.

A Geometry pairs an identifier with one of the shapes below. Parametric shapes mirror the three.js geometry
constructors, the remote viewer builds the actual vertices. Field names are the snake_case spelling of the
three.js parameter names, the codec converts them to mixed case.

See https://threejs.org/docs/#api/en/geometries/
"""
from __future__ import annotations

from dataclasses import dataclass, field
import math
from typing import ClassVar, Optional, Union
from uuid import UUID, uuid4

import numpy as np

from scenecast.scene import transforms

TWO_PI = 2.0 * math.pi


@dataclass(frozen=True)
class GeometryType:
    type_name: ClassVar[str] = ""


@dataclass(frozen=True)
class BoxGeometry(GeometryType):
    type_name: ClassVar[str] = "BoxGeometry"
    width: float = 1.0
    height: float = 1.0
    depth: float = 1.0


@dataclass(frozen=True)
class SphereGeometry(GeometryType):
    type_name: ClassVar[str] = "SphereGeometry"
    radius: float = 1.0
    width_segments: int = 32
    height_segments: int = 16


@dataclass(frozen=True)
class CylinderGeometry(GeometryType):
    """Long axis is Y in the viewer, see the pose correction in lumped.py"""

    type_name: ClassVar[str] = "CylinderGeometry"
    radius_top: float = 1.0
    radius_bottom: float = 1.0
    height: float = 1.0
    radial_segments: int = 32
    height_segments: int = 1
    theta_start: float = 0.0
    theta_length: float = TWO_PI


@dataclass(frozen=True)
class ConeGeometry(GeometryType):
    type_name: ClassVar[str] = "ConeGeometry"
    radius: float = 1.0
    height: float = 1.0
    radial_segments: int = 32
    height_segments: int = 1
    theta_start: float = 0.0
    theta_length: float = TWO_PI


@dataclass(frozen=True)
class CircleGeometry(GeometryType):
    type_name: ClassVar[str] = "CircleGeometry"
    radius: float = 1.0
    segments: int = 32
    theta_start: float = 0.0
    theta_length: float = TWO_PI


@dataclass(frozen=True)
class RingGeometry(GeometryType):
    type_name: ClassVar[str] = "RingGeometry"
    inner_radius: float = 0.5
    outer_radius: float = 1.0
    theta_segments: int = 32
    phi_segments: int = 1
    theta_start: float = 0.0
    theta_length: float = TWO_PI


@dataclass(frozen=True)
class PlaneGeometry(GeometryType):
    type_name: ClassVar[str] = "PlaneGeometry"
    width: float = 1.0
    height: float = 1.0
    width_segments: int = 1
    height_segments: int = 1


@dataclass(frozen=True)
class TorusGeometry(GeometryType):
    type_name: ClassVar[str] = "TorusGeometry"
    radius: float = 1.0
    tube: float = 0.4
    radial_segments: int = 12
    tubular_segments: int = 48


@dataclass(frozen=True)
class PolyhedronGeometry(GeometryType):
    radius: float = 1.0
    detail: int = 0


@dataclass(frozen=True)
class TetrahedronGeometry(PolyhedronGeometry):
    type_name: ClassVar[str] = "TetrahedronGeometry"


@dataclass(frozen=True)
class OctahedronGeometry(PolyhedronGeometry):
    type_name: ClassVar[str] = "OctahedronGeometry"


@dataclass(frozen=True)
class IcosahedronGeometry(PolyhedronGeometry):
    type_name: ClassVar[str] = "IcosahedronGeometry"


@dataclass(frozen=True)
class DodecahedronGeometry(PolyhedronGeometry):
    type_name: ClassVar[str] = "DodecahedronGeometry"


@dataclass(frozen=True, eq=False)
class BufferAttribute:
    """
    Per vertex data. array holds one row per vertex and item_size columns, for instance (N, 3) for positions.
    The codec sends it flattened row after row, the shape is not transmitted.
    """

    array: np.ndarray
    item_size: int = 3
    attribute_type: str = "Float32Array"
    normalized: bool = False

    def __post_init__(self):
        if self.item_size < 1:
            raise ValueError(f"item_size must be positive, got {self.item_size}")
        array = np.array(self.array, dtype=float)
        if array.size % self.item_size != 0:
            raise ValueError(f"Array of size {array.size} is not a multiple of item_size {self.item_size}")
        object.__setattr__(self, "array", array.reshape(-1, self.item_size))

    def __len__(self):
        return self.array.shape[0]


@dataclass(frozen=True)
class BufferGeometry(GeometryType):
    """Raw points or line vertices. position and color are mandatory for the viewer."""

    type_name: ClassVar[str] = "BufferGeometry"
    position: Optional[BufferAttribute] = None
    color: Optional[BufferAttribute] = None
    normal: Optional[BufferAttribute] = None
    uv: Optional[BufferAttribute] = None

    def __post_init__(self):
        if self.position is None or self.color is None:
            raise ValueError("BufferGeometry requires position and color attributes")

    @classmethod
    def from_points(cls, points, colors=None) -> BufferGeometry:
        """Point buffer from an (N, 3) array of positions and optional (N, 3) colors, white by default."""
        position = BufferAttribute(points)
        if colors is None:
            colors = np.ones_like(position.array)
        return cls(position=position, color=BufferAttribute(colors))


@dataclass(frozen=True)
class MeshFileGeometry(GeometryType):
    """
    Contents of a mesh file, interpreted by the viewer. format is the file extension (obj, dae, stl).
    """

    type_name: ClassVar[str] = "_meshfile_geometry"
    format: str = "obj"
    data: Union[str, bytes] = ""


@dataclass(frozen=True, eq=False)
class Geometry:
    """
    A shape and its identifier.

    origin is only used when the geometry is one of several parts of a LumpedObject: it becomes the pose
    of the child object holding this geometry. It is not transmitted with the geometry itself.
    """

    geometry: GeometryType
    origin: transforms.Pose = field(default_factory=transforms.identity)
    uuid: UUID = field(default_factory=uuid4)

    def __post_init__(self):
        object.__setattr__(self, "origin", transforms.as_pose(self.origin))

    @property
    def type_name(self) -> str:
        return self.geometry.type_name
