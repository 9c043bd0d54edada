import math
import unittest

import numpy as np
from parameterized import parameterized

from scenecast import codec
from scenecast.broadcaster import common
from scenecast.broadcaster.common import Property, PropertyName, RequestType
from scenecast.errors import EncodingFailure, InvalidProperty
from scenecast.scene import transforms
from scenecast.scene.geometry import Geometry, TorusGeometry
from scenecast.scene.lumped import assemble
from scenecast.scene.material import Material


class TestEnvelopes(unittest.TestCase):
    def test_request_types(self):
        self.assertEqual(
            {t.value for t in RequestType}, {"set_object", "set_transform", "set_property", "delete"}
        )

    def test_set_transform(self):
        command = common.make_set_transform_command("/robot/link0", transforms.translation(1.0, 0.0, 0.0))
        frames = command.to_frames()

        self.assertEqual(len(frames), 3)
        self.assertEqual(frames[0], b"set_transform")
        self.assertEqual(frames[1], b"/robot/link0")
        payload = codec.decode(frames[2])
        self.assertEqual(payload["type"], "set_transform")
        self.assertEqual(payload["path"], "/robot/link0")
        self.assertEqual(len(payload["matrix"]), 16)
        self.assertEqual(payload["matrix"][12:15], [1.0, 0.0, 0.0])

    def test_set_transform_sends_full_matrix(self):
        pose = transforms.isometry((0.0, 2.0, 0.0), (0.0, 0.0, 0.5))
        payload = common.make_set_transform_command("/head", pose).payload()
        np.testing.assert_allclose(np.array(payload["matrix"]).reshape(4, 4, order="F"), pose)

    def test_set_transform_bad_matrix(self):
        with self.assertRaises(EncodingFailure):
            common.make_set_transform_command("/head", np.identity(3))

    def test_set_object(self):
        lumped = assemble([Geometry(TorusGeometry(0.5, 0.2, 12, 48))], material=Material(color=0x00FF00))
        command = common.make_set_object_command("/torus", lumped)
        self.assertEqual(command.to_frames()[0], b"set_object")
        payload = command.payload()
        self.assertEqual(set(payload), {"object", "path", "type"})
        self.assertEqual(payload["object"]["geometries"][0]["tubularSegments"], 48)
        self.assertEqual(payload["object"]["materials"][0]["color"], 0x00FF00)

    def test_delete(self):
        command = common.make_delete_command("/robot")
        self.assertEqual(command.to_frames()[:2], [b"delete", b"/robot"])
        self.assertEqual(command.payload(), {"path": "/robot", "type": "delete"})

    def test_path_must_be_string(self):
        with self.assertRaises(EncodingFailure):
            common.make_delete_command(None)

    def test_from_frames(self):
        command = common.make_delete_command("/robot")
        decoded = common.Command.from_frames(command.to_frames())
        self.assertEqual(decoded.type, RequestType.DELETE)
        self.assertEqual(decoded.path, "/robot")
        self.assertEqual(decoded.data, command.data)
        with self.assertRaises(ValueError):
            common.Command.from_frames(command.to_frames()[:2])

    def test_formatter(self):
        formatter = common.CommandFormatter()
        text = formatter.format(common.make_set_property_command("/Axes", Property.visible(False)))
        self.assertIn("visible", text)
        self.assertIn("/Axes", text)

    def test_formatter_malformed_payload(self):
        formatter = common.CommandFormatter()
        for request_type, fields in [
            (RequestType.SET_OBJECT, {}),
            (RequestType.SET_OBJECT, {"object": {"geometries": [1], "materials": "phong"}}),
            (RequestType.SET_TRANSFORM, {"matrix": None}),
            (RequestType.SET_PROPERTY, {}),
        ]:
            data = codec.encode({**fields, "path": "/a", "type": request_type.value})
            text = formatter.format(common.Command(request_type, "/a", data))
            self.assertIn("/a", text)


class TestProperties(unittest.TestCase):
    @parameterized.expand(
        [
            (Property.visible, False, "visible", False),
            (Property.position, (0.0, 0.0, 1.0), "position", [0.0, 0.0, 1.0]),
            (Property.quaternion, (0.0, 0.0, 0.0, 1.0), "quaternion", [0.0, 0.0, 0.0, 1.0]),
            (Property.scale, np.array([2.0, 2.0, 2.0]), "scale", [2.0, 2.0, 2.0]),
            (Property.color, (0.5, 0.8, 0.5, 0.5), "color", [0.5, 0.8, 0.5, 0.5]),
            (Property.opacity, 0.25, "opacity", 0.25),
            (Property.modulated_opacity, 1, "modulated_opacity", 1.0),
            (Property.top_color, (0.5, 0.8, 0.5), "top_color", [0.5, 0.8, 0.5]),
            (Property.bottom_color, (0.6, 0.0, 0.5), "bottom_color", [0.6, 0.0, 0.5]),
        ]
    )
    def test_wire_shape(self, factory, value, expected_name, expected_value):
        command = common.make_set_property_command("/node", factory(value))
        payload = command.payload()
        self.assertEqual(command.to_frames()[0], b"set_property")
        self.assertEqual(payload["property"], expected_name)
        self.assertEqual(payload["value"], expected_value)
        self.assertIs(type(payload["value"]), type(expected_value))

        decoded = common.decode_property(payload["property"], payload["value"])
        self.assertEqual(decoded, factory(value))

    def test_all_names_have_a_shape(self):
        self.assertEqual(set(common.property_shapes), set(PropertyName))

    def test_quaternion_from_euler(self):
        value = common.make_set_property_command(
            "/torus", Property.quaternion(transforms.quaternion_from_euler(0.0, 0.3, 0.0))
        ).payload()["value"]
        self.assertEqual(len(value), 4)
        self.assertAlmostEqual(value[1], math.sin(0.15))
        self.assertAlmostEqual(value[3], math.cos(0.15))

    @parameterized.expand(
        [
            ("visible", 1.0),
            ("visible", [1.0]),
            ("position", 1.0),
            ("position", [0.0, 0.0, 0.0, 1.0]),
            ("quaternion", [0.0, 0.0, 1.0]),
            ("quaternion", True),
            ("color", [1.0, 1.0, 1.0]),
            ("opacity", True),
            ("opacity", [0.5]),
            ("top_color", "red"),
        ]
    )
    def test_shape_mismatch(self, name, value):
        with self.assertRaises(InvalidProperty):
            common.decode_property(name, value)

    def test_unknown_name(self):
        with self.assertRaises(InvalidProperty):
            common.decode_property("rotation", [0.0, 0.0, 0.0])
