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
Commands sent to the viewer.

A command travels as three frames: the request type, the scene path and the msgpack payload. The payload
repeats the path and the request type (under the "type" key).
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
import numbers
from typing import Any, Dict, List, Sequence, Union

import numpy as np

from scenecast import codec
from scenecast.errors import EncodingFailure, InvalidProperty
from scenecast.scene import transforms
from scenecast.scene.lumped import LumpedObject

logger = logging.getLogger(__name__)


class RequestType(Enum):
    SET_OBJECT = "set_object"
    SET_TRANSFORM = "set_transform"
    SET_PROPERTY = "set_property"
    DELETE = "delete"


class PropertyName(Enum):
    VISIBLE = "visible"
    POSITION = "position"
    QUATERNION = "quaternion"  # x, y, z, w
    SCALE = "scale"
    COLOR = "color"  # r, g, b, a
    OPACITY = "opacity"
    MODULATED_OPACITY = "modulated_opacity"
    TOP_COLOR = "top_color"  # r, g, b
    BOTTOM_COLOR = "bottom_color"  # r, g, b


BOOL = "bool"
SCALAR = "scalar"

# The value is sent without type information, the viewer infers it from the property name
property_shapes: Dict[PropertyName, Union[str, int]] = {
    PropertyName.VISIBLE: BOOL,
    PropertyName.POSITION: 3,
    PropertyName.QUATERNION: 4,
    PropertyName.SCALE: 3,
    PropertyName.COLOR: 4,
    PropertyName.OPACITY: SCALAR,
    PropertyName.MODULATED_OPACITY: SCALAR,
    PropertyName.TOP_COLOR: 3,
    PropertyName.BOTTOM_COLOR: 3,
}


def _check_value(name: PropertyName, value):
    shape = property_shapes[name]
    if shape == BOOL:
        if not isinstance(value, (bool, np.bool_)):
            raise InvalidProperty(f"Property {name.value} expects a bool, got {value!r}")
        return bool(value)

    if shape == SCALAR:
        if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Real):
            raise InvalidProperty(f"Property {name.value} expects a number, got {value!r}")
        return float(value)

    if isinstance(value, (str, bytes)):
        raise InvalidProperty(f"Property {name.value} expects {shape} numbers, got {value!r}")
    try:
        vector = np.asarray(value, dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidProperty(f"Property {name.value} expects {shape} numbers, got {value!r}") from e
    if vector.shape != (shape,):
        raise InvalidProperty(f"Property {name.value} expects {shape} numbers, got shape {vector.shape}")
    return tuple(vector.tolist())


@dataclass(frozen=True)
class Property:
    """
    A property update. Build it with one of the class methods, which fix the name for the value shape:

        Property.quaternion((0.0, 0.0, 0.0, 1.0))
    """

    name: PropertyName
    value: Any

    def __post_init__(self):
        object.__setattr__(self, "value", _check_value(self.name, self.value))

    @classmethod
    def visible(cls, value: bool) -> Property:
        return cls(PropertyName.VISIBLE, value)

    @classmethod
    def position(cls, value: Sequence[float]) -> Property:
        return cls(PropertyName.POSITION, value)

    @classmethod
    def quaternion(cls, value: Sequence[float]) -> Property:
        return cls(PropertyName.QUATERNION, value)

    @classmethod
    def scale(cls, value: Sequence[float]) -> Property:
        return cls(PropertyName.SCALE, value)

    @classmethod
    def color(cls, value: Sequence[float]) -> Property:
        return cls(PropertyName.COLOR, value)

    @classmethod
    def opacity(cls, value: float) -> Property:
        return cls(PropertyName.OPACITY, value)

    @classmethod
    def modulated_opacity(cls, value: float) -> Property:
        return cls(PropertyName.MODULATED_OPACITY, value)

    @classmethod
    def top_color(cls, value: Sequence[float]) -> Property:
        return cls(PropertyName.TOP_COLOR, value)

    @classmethod
    def bottom_color(cls, value: Sequence[float]) -> Property:
        return cls(PropertyName.BOTTOM_COLOR, value)

    def wire_value(self):
        return list(self.value) if isinstance(self.value, tuple) else self.value


def decode_property(name: str, value) -> Property:
    """Rebuild a Property from its wire form, checking that the value shape matches the name."""
    try:
        property_name = PropertyName(name)
    except ValueError as e:
        raise InvalidProperty(f"Unknown property {name!r}") from e
    return Property(property_name, value)


class Command:
    """
    An encoded request. data is the msgpack payload, encoded when the command is created so that encoding
    errors surface before anything is sent.
    """

    def __init__(self, request_type: RequestType, path: str, data: bytes = b""):
        self.type = request_type
        self.path = path
        self.data = data or b""

    def to_frames(self) -> List[bytes]:
        return [self.type.value.encode(), self.path.encode(), self.data]

    @classmethod
    def from_frames(cls, frames: Sequence[bytes]) -> Command:
        if len(frames) != 3:
            raise ValueError(f"Expected 3 frames, got {len(frames)}")
        return cls(RequestType(bytes(frames[0]).decode()), bytes(frames[1]).decode(), bytes(frames[2]))

    def payload(self) -> Dict[str, Any]:
        return codec.decode(self.data)

    def __repr__(self):
        return f"Command({self.type.value}, {self.path!r}, {len(self.data)} bytes)"


def _make_command(request_type: RequestType, path: str, **fields) -> Command:
    if not isinstance(path, str):
        raise EncodingFailure(f"Scene path must be a string, got {path!r}")
    payload = {**fields, "path": path, "type": request_type.value}
    return Command(request_type, path, codec.encode(payload))


def make_set_object_command(path: str, lumped: LumpedObject) -> Command:
    return _make_command(RequestType.SET_OBJECT, path, object=codec.encode_lumped_object(lumped))


def make_set_transform_command(path: str, matrix: transforms.Pose) -> Command:
    """matrix is the full homogeneous matrix of the node relative to its parent"""
    try:
        wire_matrix = transforms.to_wire(matrix)
    except ValueError as e:
        raise EncodingFailure(str(e)) from e
    return _make_command(RequestType.SET_TRANSFORM, path, matrix=wire_matrix)


def make_set_property_command(path: str, property_: Property) -> Command:
    return _make_command(
        RequestType.SET_PROPERTY, path, property=property_.name.value, value=property_.wire_value()
    )


def make_delete_command(path: str) -> Command:
    return _make_command(RequestType.DELETE, path)


class CommandFormatter:
    """Log text for a command. Tolerates payloads with missing or malformed fields."""

    @staticmethod
    def _type_names(entries) -> str:
        if not isinstance(entries, list):
            return "?"
        return ", ".join(str(e.get("type", "?")) if isinstance(e, dict) else "?" for e in entries)

    def format_object(self, object_) -> str:
        if not isinstance(object_, dict):
            return "no object"
        geometries = self._type_names(object_.get("geometries", []))
        materials = self._type_names(object_.get("materials", []))
        return f"geometries [{geometries}] materials [{materials}]"

    def format(self, command: Command) -> str:
        s = f"={command.type.value} {command.path}: "
        payload = command.payload()
        if not isinstance(payload, dict):
            return s + "unreadable payload"
        if command.type == RequestType.SET_OBJECT:
            s += self.format_object(payload.get("object"))
        elif command.type == RequestType.SET_TRANSFORM:
            matrix = payload.get("matrix")
            s += f"translation {matrix[12:15]}" if isinstance(matrix, list) else "no matrix"
        elif command.type == RequestType.SET_PROPERTY:
            s += f"{payload.get('property')} = {payload.get('value')}"
        return s
