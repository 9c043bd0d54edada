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
Assembly of the unit sent by a set_object command.

A LumpedObject bundles a root Object with everything it references: geometries, one material and optionally
one texture and one image. The viewer resolves references by identifier, so all of them must agree. assemble()
is the only place where the references are wired: callers build independent entities and never set
Material.map, ImageTexture.image or Object.material themselves.

The root object does not reference a geometry. Each geometry gets its own child object, posed by the
geometry origin, which allows a single scene path to hold a multi part body.

See https://github.com/mrdoob/three.js/wiki/JSON-Object-Scene-format-4
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
import logging
import math
from typing import Iterable, List, Optional, Tuple

from scenecast.errors import EmptyScene
from scenecast.scene import transforms
from scenecast.scene.geometry import CylinderGeometry, Geometry
from scenecast.scene.material import Material
from scenecast.scene.object_ import Object, ObjectType
from scenecast.scene.texture import Image, Texture

logger = logging.getLogger(__name__)

# The viewer cylinder long axis is Y, description files use Z
CYLINDER_CORRECTION = transforms.rotation_x(math.pi / 2)


@dataclass(frozen=True)
class Metadata:
    type: str = "Object"
    version: float = 4.5


@dataclass(frozen=True, eq=False)
class LumpedObject:
    geometries: Tuple[Geometry, ...]
    material: Material
    object: Object
    texture: Optional[Texture] = None
    image: Optional[Image] = None
    metadata: Metadata = field(default_factory=Metadata)


def child_pose(geometry: Geometry) -> transforms.Pose:
    if isinstance(geometry.geometry, CylinderGeometry):
        return geometry.origin @ CYLINDER_CORRECTION
    return geometry.origin.copy()


def assemble(
    geometries: Iterable[Geometry],
    material: Optional[Material] = None,
    texture: Optional[Texture] = None,
    image: Optional[Image] = None,
    root_pose: Optional[transforms.Pose] = None,
    root_variant: ObjectType = ObjectType.MESH,
    metadata: Optional[Metadata] = None,
    root: Optional[Object] = None,
) -> LumpedObject:
    """
    Return a LumpedObject with all identifiers wired.

    The inputs are not modified: texture, material and root are replaced by copies that keep their identifiers.
    Children are created on each call and get new identifiers.

    root, when given, provides the identifier, pose and type of the root object, root_pose and root_variant are
    then ignored.
    """
    geometries = tuple(geometries)
    if not geometries:
        raise EmptyScene("Cannot assemble an object without geometry")

    if material is None:
        material = Material()

    if texture is not None and image is not None:
        if texture.is_image:
            texture = replace(texture, texture_type=replace(texture.texture_type, image=image.uuid))
        else:
            logger.warning("Image %s ignored: texture %s is not an image texture", image.uuid, texture.uuid)

    material = replace(material, map=texture.uuid if texture is not None else None)

    if root is None:
        root = Object(
            matrix=root_pose if root_pose is not None else transforms.identity(), object_type=root_variant
        )

    children: List[Object] = [
        Object(
            matrix=child_pose(geometry),
            object_type=root.object_type,
            material=material.uuid,
            geometry=geometry.uuid,
        )
        for geometry in geometries
    ]
    root = replace(root, material=material.uuid, children=tuple(children))

    return LumpedObject(
        geometries=geometries,
        material=material,
        object=root,
        texture=texture,
        image=image,
        metadata=metadata if metadata is not None else Metadata(),
    )


class LumpedObjectBuilder:
    """
    Accumulates the parts of a LumpedObject. Nothing is wired before finalize().

        lumped = (
            LumpedObjectBuilder()
            .geometry(Geometry(BoxGeometry(0.5, 0.5, 0.5)))
            .material(Material(color=0xFF00FF))
            .object(Object(transforms.translation(0.0, 1.0, 0.0)))
            .finalize()
        )
    """

    def __init__(self):
        self._geometries: List[Geometry] = []
        self._material: Optional[Material] = None
        self._texture: Optional[Texture] = None
        self._image: Optional[Image] = None
        self._object: Optional[Object] = None
        self._metadata: Optional[Metadata] = None

    def geometry(self, geometry: Geometry) -> LumpedObjectBuilder:
        self._geometries.append(geometry)
        return self

    def geometries(self, geometries: Iterable[Geometry]) -> LumpedObjectBuilder:
        self._geometries.extend(geometries)
        return self

    def material(self, material: Material) -> LumpedObjectBuilder:
        self._material = material
        return self

    def texture(self, texture: Texture) -> LumpedObjectBuilder:
        self._texture = texture
        return self

    def image(self, image: Image) -> LumpedObjectBuilder:
        self._image = image
        return self

    def object(self, object_: Object) -> LumpedObjectBuilder:
        self._object = object_
        return self

    def metadata(self, metadata: Metadata) -> LumpedObjectBuilder:
        self._metadata = metadata
        return self

    def finalize(self) -> LumpedObject:
        if not self._geometries:
            raise EmptyScene("LumpedObjectBuilder.finalize: no geometry was added")
        return assemble(
            self._geometries,
            material=self._material,
            texture=self._texture,
            image=self._image,
            metadata=self._metadata,
            root=self._object,
        )
