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
A server that acknowledges viewer commands without rendering anything.

It decodes and logs every request, which makes it useful to inspect what a program sends, and it is the peer
of the client in tests.
"""
from __future__ import annotations

import argparse
import logging
import threading
from typing import Any, Dict, List, Optional

import zmq

from scenecast import config
from scenecast.broadcaster import common
from scenecast.broadcaster.cli_utils import add_logging_cli_args, init_logging
from scenecast.errors import InvalidProperty

logger = logging.getLogger() if __name__ == "__main__" else logging.getLogger(__name__)

ACK = "ok"


def check_payload(request_type: common.RequestType, payload: Dict[str, Any]):
    """Raise ValueError when a field the viewer needs for request_type is missing or malformed"""
    if request_type == common.RequestType.SET_OBJECT:
        object_ = payload.get("object")
        if not isinstance(object_, dict):
            raise ValueError("set_object needs an object map")
        for key in ("geometries", "materials"):
            if not isinstance(object_.get(key, []), list):
                raise ValueError(f"set_object {key} must be a list")
    elif request_type == common.RequestType.SET_TRANSFORM:
        matrix = payload.get("matrix")
        if not isinstance(matrix, list) or len(matrix) != 16:
            raise ValueError("set_transform needs a matrix of 16 numbers")
        if not all(isinstance(v, (int, float)) and not isinstance(v, bool) for v in matrix):
            raise ValueError("set_transform matrix holds non numeric values")
    elif request_type == common.RequestType.SET_PROPERTY:
        common.decode_property(payload["property"], payload["value"])


class Server:
    def __init__(self, context: zmq.Context = None):
        self._context = context if context is not None else zmq.Context.instance()
        self._socket: Optional[zmq.Socket] = None
        self._shutdown = threading.Event()
        self._formatter = common.CommandFormatter()
        self.received: List[common.Command] = []

    def bind(self, endpoint: str) -> str:
        """Bind to endpoint, "tcp://127.0.0.1:*" picks a free port. Return the bound endpoint."""
        self._socket = self._context.socket(zmq.REP)
        self._socket.setsockopt(zmq.LINGER, 0)
        self._socket.bind(endpoint)
        bound = self._socket.getsockopt_string(zmq.LAST_ENDPOINT)
        logger.info("Listening on %s", bound)
        return bound

    def handle(self, frames: List[bytes]) -> str:
        try:
            command = common.Command.from_frames(frames)
            payload = command.payload()
            if not isinstance(payload, dict):
                raise ValueError("payload is not a map")
            if payload.get("type") != command.type.value or payload.get("path") != command.path:
                raise ValueError("payload does not match the command frames")
            check_payload(command.type, payload)
        except (ValueError, KeyError, InvalidProperty) as e:
            logger.warning("Invalid request: %s", e)
            return f"error: {e}"

        self.received.append(command)
        logger.info(self._formatter.format(command))
        return ACK

    def run(self, poll_interval: int = 100):
        if self._socket is None:
            raise RuntimeError("Server.run: bind() must be called first")

        poller = zmq.Poller()
        poller.register(self._socket, zmq.POLLIN)
        while not self._shutdown.is_set():
            events = dict(poller.poll(poll_interval))
            if self._socket in events:
                frames = self._socket.recv_multipart()
                self._socket.send_string(self.handle(frames))

        self._socket.close()
        self._socket = None

    def shutdown(self):
        self._shutdown.set()


def main():
    args, args_parser = parse_cli_args()
    init_logging(args)

    server = Server()
    server.bind(args.endpoint)
    try:
        server.run()
    except KeyboardInterrupt:
        server.shutdown()


def parse_cli_args():
    parser = argparse.ArgumentParser(description="Start an acknowledging scene server")
    add_logging_cli_args(parser)
    parser.add_argument("--endpoint", default=config.get_endpoint().replace("127.0.0.1", "*"))
    return parser.parse_args(), parser


if __name__ == "__main__":
    main()
