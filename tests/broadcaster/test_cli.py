import argparse
import logging
import logging.handlers
import os
import tempfile
import unittest
from unittest.mock import patch

from scenecast.broadcaster import cli_utils
from scenecast.broadcaster.apps import cli
from scenecast.broadcaster.common import RequestType

from tests.broadcaster.server_testcase import ServerTestCase


class TestParsePropertyValue(unittest.TestCase):
    def test_bool(self):
        self.assertIs(cli.parse_property_value("visible", ["false"]), False)
        self.assertIs(cli.parse_property_value("visible", ["1"]), True)
        with self.assertRaises(argparse.ArgumentTypeError):
            cli.parse_property_value("visible", ["maybe"])

    def test_numbers(self):
        self.assertEqual(cli.parse_property_value("opacity", ["0.5"]), 0.5)
        self.assertEqual(cli.parse_property_value("position", ["1", "2", "3"]), [1.0, 2.0, 3.0])

    def test_not_a_number(self):
        with self.assertRaises(argparse.ArgumentTypeError):
            cli.parse_property_value("opacity", ["half"])
        with self.assertRaises(argparse.ArgumentTypeError):
            cli.parse_property_value("position", ["1", "two", "3"])


class TestInitLogging(unittest.TestCase):
    def setUp(self):
        self.root = logging.getLogger()
        self.level = self.root.level
        self.handlers = list(self.root.handlers)

    def tearDown(self):
        self.remove_new_handlers()
        self.root.setLevel(self.level)

    def remove_new_handlers(self):
        for handler in list(self.root.handlers):
            if handler not in self.handlers:
                self.root.removeHandler(handler)
                handler.close()

    def test_log_file(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            log_file = os.path.join(tmp_dir, "scenecast.log")
            cli_utils.init_logging(argparse.Namespace(log_level="debug", log_file=log_file))
            self.assertEqual(self.root.level, logging.DEBUG)
            new_handlers = [h for h in self.root.handlers if h not in self.handlers]
            self.assertEqual(len(new_handlers), 2)
            self.assertTrue(any(isinstance(h, logging.handlers.RotatingFileHandler) for h in new_handlers))
            self.remove_new_handlers()

    def test_invalid_level(self):
        with self.assertRaises(ValueError):
            cli_utils.init_logging(argparse.Namespace(log_level="chatty", log_file=None))


class TestCliCommands(ServerTestCase):
    def test_transform(self):
        args = argparse.Namespace(path="/head", xyz=(1.0, 1.0, 0.0), rpy=(0.0, 0.0, 0.0))
        cli.process_transform_command(self.new_client(), args)
        self.assertEqual(self.received[-1].payload()["matrix"][12:15], [1.0, 1.0, 0.0])

    def test_property(self):
        args = argparse.Namespace(path="/Axes", name="visible", value=["false"])
        cli.process_property_command(self.new_client(), args)
        self.assertEqual(self.received[-1].payload()["value"], False)

    def test_delete(self):
        args = argparse.Namespace(path=["/a", "/b"])
        cli.process_delete_command(self.new_client(), args)
        self.assertEqual(
            [(c.type, c.path) for c in self.received], [(RequestType.DELETE, "/a"), (RequestType.DELETE, "/b")]
        )

    def run_main(self, *argv):
        argv = ["scenecast", "--endpoint", self.endpoint, "--timeout", str(self.timeout), *argv]
        with patch("sys.argv", argv), patch("scenecast.broadcaster.cli_utils.init_logging"):
            return cli.main()

    def test_main(self):
        self.assertEqual(self.run_main("property", "/Axes", "opacity", "0.5"), 0)
        self.assertEqual(self.received[-1].payload()["value"], 0.5)

    def test_main_bad_value(self):
        self.assertEqual(self.run_main("property", "/Axes", "opacity", "half"), 2)
        self.assertEqual(self.received, [])
