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
Textures and images.

The viewer tells the two texture kinds apart from the fields present in the message, there is no explicit
tag: a text texture carries text/font_size/font_face, an image texture carries image/repeat/wrap.
"""
from __future__ import annotations

import base64
from dataclasses import dataclass, field
import logging
from pathlib import Path
from typing import Optional, Tuple, Union
from uuid import UUID, uuid4

from scenecast.errors import UnsupportedMedia

logger = logging.getLogger(__name__)

# three.js THREE.ClampToEdgeWrapping
CLAMP_TO_EDGE_WRAPPING = 1001

_media_types = {
    ".png": "image/png",
}


@dataclass(frozen=True)
class TextTexture:
    text: str
    font_size: int = 100
    font_face: str = "sans-serif"


@dataclass(frozen=True)
class ImageTexture:
    image: Optional[UUID] = None
    repeat: Tuple[int, int] = (1, 1)
    wrap: Tuple[int, int] = (CLAMP_TO_EDGE_WRAPPING, CLAMP_TO_EDGE_WRAPPING)


TextureType = Union[TextTexture, ImageTexture]


@dataclass(frozen=True)
class Texture:
    texture_type: TextureType
    uuid: UUID = field(default_factory=uuid4)

    @classmethod
    def text(cls, text: str, font_size: int = 100, font_face: str = "sans-serif") -> Texture:
        return cls(TextTexture(text, font_size, font_face))

    @classmethod
    def image(cls) -> Texture:
        """An image texture, linked to its Image by assemble()"""
        return cls(ImageTexture())

    @property
    def is_image(self) -> bool:
        return isinstance(self.texture_type, ImageTexture)


@dataclass(frozen=True)
class Image:
    url: str
    uuid: UUID = field(default_factory=uuid4)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> Image:
        """
        Embed the file in a data URI. Only PNG files are supported.
        """
        path = Path(path)
        media_type = _media_types.get(path.suffix.lower())
        if media_type is None:
            raise UnsupportedMedia(f"Unsupported image type for {path}, expected one of {list(_media_types)}")

        data = base64.b64encode(path.read_bytes()).decode("ascii")
        logger.debug("Loaded image %s (%d base64 bytes)", path, len(data))
        return cls(f"data:{media_type};base64,{data}")
