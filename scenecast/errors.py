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
Exceptions raised by scenecast.

Two families are kept apart so that a caller can tell them apart in a single except clause:
- StructuralError: the command is malformed or the channel is misused. These are raised before anything
  is written to the socket and re-issuing the same command will fail the same way.
- ChannelError: the remote side could not be reached or the exchange failed. The command may be re-issued.
"""


class SceneCastError(Exception):
    pass


class StructuralError(SceneCastError):
    pass


class EmptyScene(StructuralError):
    """An object was assembled without any geometry."""


class UnsupportedMedia(StructuralError):
    """The image file is not a PNG."""


class EncodingFailure(StructuralError):
    """A payload could not be serialized."""


class InvalidProperty(StructuralError, ValueError):
    """A property value does not have the shape expected for its name."""


class ProtocolError(StructuralError):
    """A request was sent while the reply to the previous one is outstanding."""


class ChannelError(SceneCastError):
    pass


class ConnectionFailure(ChannelError):
    """The endpoint could not be connected."""


class TransportFailure(ChannelError):
    """Sending a request or receiving its reply failed."""
