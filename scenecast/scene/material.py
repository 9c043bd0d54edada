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
Material definitions, see https://threejs.org/docs/index.html#api/en/materials/Material
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import ClassVar, Optional
from uuid import UUID, uuid4


class Side(IntEnum):
    FRONT = 0
    BACK = 1
    DOUBLE = 2


@dataclass(frozen=True)
class MaterialType:
    type_name: ClassVar[str] = ""


@dataclass(frozen=True)
class MeshBasicMaterial(MaterialType):
    type_name: ClassVar[str] = "MeshBasicMaterial"


@dataclass(frozen=True)
class MeshPhongMaterial(MaterialType):
    type_name: ClassVar[str] = "MeshPhongMaterial"


@dataclass(frozen=True)
class MeshLambertMaterial(MaterialType):
    type_name: ClassVar[str] = "MeshLambertMaterial"


@dataclass(frozen=True)
class MeshToonMaterial(MaterialType):
    type_name: ClassVar[str] = "MeshToonMaterial"


@dataclass(frozen=True)
class LineBasicMaterial(MaterialType):
    type_name: ClassVar[str] = "LineBasicMaterial"
    linewidth: float = 1.0


@dataclass(frozen=True)
class PointsMaterial(MaterialType):
    type_name: ClassVar[str] = "PointsMaterial"
    size: float = 1.0


@dataclass(frozen=True)
class Material:
    """
    A material type plus optional decorations. Decorations left to None are not transmitted and the viewer
    applies its own default.

    map is the identifier of the texture applied by the material. It is filled in by assemble(), do not set it.
    """

    material_type: MaterialType = field(default_factory=MeshPhongMaterial)
    color: Optional[int] = None
    opacity: Optional[float] = None
    reflectivity: Optional[float] = None
    side: Optional[int] = Side.DOUBLE
    transparent: Optional[bool] = None
    vertex_colors: Optional[bool] = None
    wireframe: Optional[bool] = None
    wireframe_line_width: Optional[float] = None
    map: Optional[UUID] = None
    uuid: UUID = field(default_factory=uuid4)

    decorations: ClassVar = (
        "color",
        "opacity",
        "reflectivity",
        "side",
        "transparent",
        "vertex_colors",
        "wireframe",
        "wireframe_line_width",
    )

    def __post_init__(self):
        if self.color is not None and not 0 <= self.color <= 0xFFFFFF:
            raise ValueError(f"color {self.color:#x} is not a 24 bit RGB value")

    @property
    def type_name(self) -> str:
        return self.material_type.type_name
