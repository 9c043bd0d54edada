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

from contextlib import contextmanager
import logging
import threading
from typing import Optional

import zmq

from scenecast import config
from scenecast.broadcaster import common
from scenecast.errors import ConnectionFailure, ProtocolError, TransportFailure
from scenecast.scene import transforms
from scenecast.scene.lumped import LumpedObject

logger = logging.getLogger() if __name__ == "__main__" else logging.getLogger(__name__)


class Client:
    """
    The client class is responsible for:
    - owning the request socket connected to the viewer
    - sending one command at a time and reading its acknowledgement

    The viewer answers each request with a single string. A request must be acknowledged before the next one
    is sent: send_command() raises ProtocolError otherwise. The client is meant to be used by one thread, a
    concurrent call raises ProtocolError instead of waiting.

    There is no retry. After a TransportFailure the command can be sent again, once reset() has been called
    if the failure happened while waiting for the acknowledgement.
    """

    def __init__(self, endpoint: Optional[str] = None, timeout: Optional[int] = None, context: zmq.Context = None):
        self.endpoint = endpoint if endpoint is not None else config.get_endpoint()
        self.timeout = timeout if timeout is not None else config.get_timeout()
        self._context = context if context is not None else zmq.Context.instance()
        self._lock = threading.Lock()
        self._awaiting_reply = False
        self.socket: Optional[zmq.Socket] = None
        self._connect()

    def __del__(self):
        if getattr(self, "socket", None) is not None:
            self.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def _connect(self):
        socket = self._context.socket(zmq.REQ)
        socket.setsockopt(zmq.LINGER, 0)
        if self.timeout is not None:
            socket.setsockopt(zmq.RCVTIMEO, self.timeout)
            socket.setsockopt(zmq.SNDTIMEO, self.timeout)
        try:
            socket.connect(self.endpoint)
        except zmq.ZMQError as e:
            socket.close()
            raise ConnectionFailure(f"Failed to connect to viewer '{self.endpoint}': {e}") from e

        logger.info("Connected to %s", self.endpoint)
        self.socket = socket
        self._awaiting_reply = False

    def close(self):
        if self.socket is not None:
            self.socket.close(linger=0)
            self.socket = None
            logger.info("Disconnected from %s", self.endpoint)

    def is_connected(self):
        return self.socket is not None

    def is_awaiting_reply(self):
        return self._awaiting_reply

    def reset(self):
        """Drop the socket, and a possibly outstanding request, and connect again"""
        with self._exclusive():
            self.close()
            self._connect()

    @contextmanager
    def _exclusive(self):
        if not self._lock.acquire(blocking=False):
            raise ProtocolError("Client used concurrently from several threads")
        try:
            yield
        finally:
            self._lock.release()

    def _send(self, command: common.Command):
        if self.socket is None:
            raise ProtocolError("Client is closed")
        if self._awaiting_reply:
            raise ProtocolError(f"Cannot send {command}: the previous request has not been acknowledged")

        try:
            self.socket.send_multipart(command.to_frames())
        except zmq.Again as e:
            raise TransportFailure(f"Timeout sending {command} to {self.endpoint}") from e
        except zmq.ZMQError as e:
            raise TransportFailure(f"Failed to send {command} to {self.endpoint}: {e}") from e

        self._awaiting_reply = True
        logger.debug("Send %s", command)

    def _wait_ack(self) -> str:
        if self.socket is None:
            raise ProtocolError("Client is closed")
        if not self._awaiting_reply:
            raise ProtocolError("No request is waiting for an acknowledgement")

        try:
            reply = self.socket.recv_string()
        except zmq.Again as e:
            raise TransportFailure(f"Timeout waiting for acknowledgement from {self.endpoint}") from e
        except zmq.ZMQError as e:
            raise TransportFailure(f"Failed to receive acknowledgement from {self.endpoint}: {e}") from e

        self._awaiting_reply = False
        logger.debug("Received reply %s", reply)
        return reply

    def send_command(self, command: common.Command):
        with self._exclusive():
            self._send(command)

    def wait_ack(self) -> str:
        with self._exclusive():
            return self._wait_ack()

    def request(self, command: common.Command) -> str:
        with self._exclusive():
            self._send(command)
            return self._wait_ack()

    def set_object(self, path: str, lumped: LumpedObject) -> str:
        return self.request(common.make_set_object_command(path, lumped))

    def set_transform(self, path: str, matrix: transforms.Pose) -> str:
        return self.request(common.make_set_transform_command(path, matrix))

    def set_property(self, path: str, property_: common.Property) -> str:
        return self.request(common.make_set_property_command(path, property_))

    def delete(self, path: str) -> str:
        return self.request(common.make_delete_command(path))
