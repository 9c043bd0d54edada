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
msgpack encoder for scene entities.

Payloads are msgpack maps keyed by field name, never positional arrays, so that the viewer reads them by name.
The field names are the ones of the three.js JSON object format: mixed case for geometry and material
parameters (radialSegments, vertexColors), but snake_case for text textures (font_size), as the viewer
expects.

numpy arrays are sent as flat lists of numbers. Matrices are flattened column by column, buffer attributes
vertex by vertex.
"""
from dataclasses import fields
from enum import Enum
import logging
from typing import Any, Callable, Dict, Mapping
from uuid import UUID

import msgpack
import numpy as np

from scenecast.errors import EncodingFailure
from scenecast.scene import transforms
from scenecast.scene.geometry import BufferAttribute, BufferGeometry, Geometry
from scenecast.scene.lumped import LumpedObject, Metadata
from scenecast.scene.material import Material
from scenecast.scene.object_ import Object
from scenecast.scene.texture import Image, ImageTexture, TextTexture, Texture

logger = logging.getLogger(__name__)

# Type tag of text textures, part of the text texture fields, not a variant tag
TEXT_TEXTURE_TYPE = "_text"


def camel_case(name: str) -> str:
    first, *others = name.split("_")
    return first + "".join(word.capitalize() for word in others)


def _optional_uuid(value):
    return str(value) if value is not None else None


def encode_buffer_attribute(attribute: BufferAttribute) -> Dict[str, Any]:
    return {
        "itemSize": attribute.item_size,
        "type": attribute.attribute_type,
        "array": attribute.array.ravel().tolist(),
        "normalized": attribute.normalized,
    }


def encode_geometry(geometry: Geometry) -> Dict[str, Any]:
    shape = geometry.geometry
    result: Dict[str, Any] = {"uuid": str(geometry.uuid), "type": shape.type_name}
    if isinstance(shape, BufferGeometry):
        attributes = {}
        for name in ("position", "color", "normal", "uv"):
            attribute = getattr(shape, name)
            if attribute is not None:
                attributes[name] = encode_buffer_attribute(attribute)
        result["data"] = {"attributes": attributes}
    else:
        for f in fields(shape):
            result[camel_case(f.name)] = getattr(shape, f.name)
    return result


def encode_material(material: Material) -> Dict[str, Any]:
    result: Dict[str, Any] = {"uuid": str(material.uuid), "type": material.type_name}
    for f in fields(material.material_type):
        result[f.name] = getattr(material.material_type, f.name)
    for name in Material.decorations:
        value = getattr(material, name)
        if value is not None:
            result[camel_case(name)] = int(value) if isinstance(value, Enum) else value
    if material.map is not None:
        result["map"] = str(material.map)
    return result


def encode_texture(texture: Texture) -> Dict[str, Any]:
    result: Dict[str, Any] = {"uuid": str(texture.uuid)}
    texture_type = texture.texture_type
    if isinstance(texture_type, TextTexture):
        result.update(
            {
                "type": TEXT_TEXTURE_TYPE,
                "text": texture_type.text,
                "font_size": texture_type.font_size,
                "font_face": texture_type.font_face,
            }
        )
    elif isinstance(texture_type, ImageTexture):
        result.update(
            {
                "image": _optional_uuid(texture_type.image),
                "repeat": list(texture_type.repeat),
                "wrap": list(texture_type.wrap),
            }
        )
    else:
        raise EncodingFailure(f"Unknown texture type {type(texture_type).__name__}")
    return result


def encode_image(image: Image) -> Dict[str, Any]:
    return {"uuid": str(image.uuid), "url": image.url}


def encode_object(object_: Object) -> Dict[str, Any]:
    result: Dict[str, Any] = {"uuid": str(object_.uuid), "material": _optional_uuid(object_.material)}
    if object_.geometry is not None:
        result["geometry"] = str(object_.geometry)
    if object_.children:
        result["children"] = [encode_object(child) for child in object_.children]
    result["matrix"] = transforms.to_wire(object_.matrix)
    result["type"] = object_.object_type.value
    return result


def encode_metadata(metadata: Metadata) -> Dict[str, Any]:
    return {"type": metadata.type, "version": metadata.version}


def encode_lumped_object(lumped: LumpedObject) -> Dict[str, Any]:
    """textures, images and materials are one element lists in the object format"""
    result: Dict[str, Any] = {"metadata": encode_metadata(lumped.metadata)}
    if lumped.texture is not None:
        result["textures"] = [encode_texture(lumped.texture)]
    if lumped.image is not None:
        result["images"] = [encode_image(lumped.image)]
    result["geometries"] = [encode_geometry(geometry) for geometry in lumped.geometries]
    result["materials"] = [encode_material(lumped.material)]
    result["object"] = encode_object(lumped.object)
    return result


_encoders: Mapping[type, Callable[[Any], Dict[str, Any]]] = {
    LumpedObject: encode_lumped_object,
    Object: encode_object,
    Geometry: encode_geometry,
    Material: encode_material,
    Texture: encode_texture,
    Image: encode_image,
    Metadata: encode_metadata,
    BufferAttribute: encode_buffer_attribute,
}


def default(obj):
    """msgpack hook for the types it does not know"""
    encoder = _encoders.get(type(obj))
    if encoder is not None:
        return encoder(obj)
    if isinstance(obj, np.ndarray):
        if obj.shape == (4, 4):
            return transforms.to_wire(obj)
        return obj.ravel().tolist()
    if isinstance(obj, np.generic):
        return obj.item()
    if isinstance(obj, UUID):
        return str(obj)
    if isinstance(obj, Enum):
        return obj.value
    raise TypeError(f"Cannot encode object of type {type(obj).__name__}")


def encode(payload: Mapping[str, Any]) -> bytes:
    try:
        return msgpack.packb(payload, default=default, use_bin_type=True)
    except (TypeError, ValueError, OverflowError) as e:
        raise EncodingFailure(f"Cannot encode payload: {e}") from e


def decode(buffer: bytes) -> Dict[str, Any]:
    return msgpack.unpackb(buffer, raw=False)
