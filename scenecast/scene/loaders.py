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
Helpers building entities from files and common scene elements.
"""
import logging
from pathlib import Path
from typing import Union

from scenecast.scene.geometry import Geometry, MeshFileGeometry, PlaneGeometry
from scenecast.scene.lumped import LumpedObject, assemble
from scenecast.scene.material import Material, MeshPhongMaterial
from scenecast.scene.texture import Texture

logger = logging.getLogger(__name__)

# Formats the viewer parses from binary data, the others are sent as text
binary_mesh_formats = {"stl"}


def mesh_format(path: Union[str, Path]) -> str:
    suffix = Path(path).suffix
    if not suffix:
        raise ValueError(f"Cannot infer the mesh format of {path}: no file extension")
    return suffix[1:].lower()


def load_mesh(path: Union[str, Path]) -> MeshFileGeometry:
    """
    Read a mesh file for the viewer. The file is not parsed.
    """
    format_ = mesh_format(path)
    path = Path(path)
    if format_ in binary_mesh_formats:
        data = path.read_bytes()
    else:
        data = path.read_text()
    logger.debug("Loaded %s mesh %s", format_, path)
    return MeshFileGeometry(format=format_, data=data)


def scene_text(texture: Texture, width: float = 10.0, height: float = 10.0) -> LumpedObject:
    """A transparent plane showing a text texture"""
    return assemble(
        [Geometry(PlaneGeometry(width, height, 1, 1))],
        material=Material(MeshPhongMaterial(), transparent=True),
        texture=texture,
    )
