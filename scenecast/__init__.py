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
Scene description and update commands for a remote three.js viewer.

Entities (geometries, materials, textures, images) are assembled into a LumpedObject by the scene package,
encoded to msgpack by the codec module, and sent to the viewer by broadcaster.client.Client.
"""
import logging

version = (0, 1, 0)
__version__ = f"v{version[0]}.{version[1]}.{version[2]}"

logging.getLogger(__name__).addHandler(logging.NullHandler())
