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

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple
from uuid import UUID, uuid4

from scenecast.scene import transforms


class ObjectType(Enum):
    MESH = "Mesh"
    POINTS = "Points"
    LINE_SEGMENTS = "LineSegments"


@dataclass(frozen=True, eq=False)
class Object:
    """
    A node of the viewer scene graph. Geometry and material are referenced by identifier, children are owned.
    """

    matrix: transforms.Pose = field(default_factory=transforms.identity)
    object_type: ObjectType = ObjectType.MESH
    material: Optional[UUID] = None
    geometry: Optional[UUID] = None
    children: Tuple[Object, ...] = ()
    uuid: UUID = field(default_factory=uuid4)

    def __post_init__(self):
        object.__setattr__(self, "matrix", transforms.as_pose(self.matrix))
        object.__setattr__(self, "children", tuple(self.children))
