import math
import unittest

from scenecast.broadcaster.common import RequestType
from scenecast.scene import transforms
from scenecast.scene.description import Joint, Link, compute_paths, publish
from scenecast.scene.geometry import BoxGeometry, CylinderGeometry, Geometry, SphereGeometry

from tests.broadcaster.server_testcase import ServerTestCase


def sample_description():
    links = [
        Link("base", [Geometry(BoxGeometry(1.0, 1.0, 0.2))]),
        Link("arm", [Geometry(CylinderGeometry(0.05, 0.05, 1.0), transforms.translation(0.0, 0.0, 0.5))]),
        Link("hand", [Geometry(SphereGeometry(0.1)), Geometry(BoxGeometry(0.1, 0.1, 0.1))]),
        Link("tool_frame"),
    ]
    # listed child first to check that the order of joints does not matter
    joints = [
        Joint("wrist", "arm", "hand", transforms.translation(0.0, 0.0, 1.0)),
        Joint("shoulder", "base", "arm", transforms.isometry((0.0, 0.0, 0.1), (0.0, math.pi / 4, 0.0))),
        Joint("tool", "hand", "tool_frame"),
    ]
    return links, joints


class TestComputePaths(unittest.TestCase):
    def test_paths(self):
        links, joints = sample_description()
        paths = compute_paths(links, joints)
        self.assertEqual(paths.links["base"], "/base")
        self.assertEqual(paths.joints["shoulder"], "/base/shoulder")
        self.assertEqual(paths.links["arm"], "/base/shoulder/arm")
        self.assertEqual(paths.joints["wrist"], "/base/shoulder/arm/wrist")
        self.assertEqual(paths.links["hand"], "/base/shoulder/arm/wrist/hand")
        self.assertEqual(paths.links["tool_frame"], "/base/shoulder/arm/wrist/hand/tool/tool_frame")

    def test_prefix(self):
        links, joints = sample_description()
        paths = compute_paths(links, joints, prefix="/robots/left")
        self.assertEqual(paths.links["base"], "/robots/left/base")

    def test_cycle(self):
        joints = [Joint("a_to_b", "a", "b"), Joint("b_to_a", "b", "a")]
        with self.assertRaises(ValueError):
            compute_paths([Link("a"), Link("b")], joints)

    def test_two_parents(self):
        joints = [Joint("a_to_c", "a", "c"), Joint("b_to_c", "b", "c")]
        with self.assertRaises(ValueError):
            compute_paths([], joints)


class TestPublish(ServerTestCase):
    def test_publish(self):
        links, joints = sample_description()
        client = self.new_client()
        paths = publish(client, links, joints)

        types = [c.type for c in self.received]
        deletes = len(paths.all())
        self.assertEqual(types[:deletes], [RequestType.DELETE] * deletes)
        # tool_frame has no visual
        self.assertEqual(types[deletes : deletes + 3], [RequestType.SET_OBJECT] * 3)
        self.assertEqual(types[deletes + 3 :], [RequestType.SET_TRANSFORM] * 3)

        set_objects = {c.path: c.payload() for c in self.received if c.type == RequestType.SET_OBJECT}
        hand = set_objects[paths.links["hand"]]["object"]
        self.assertEqual(len(hand["object"]["children"]), 2)

        set_transforms = {c.path: c.payload() for c in self.received if c.type == RequestType.SET_TRANSFORM}
        self.assertEqual(set_transforms["/base/shoulder/arm/wrist"]["matrix"][12:15], [0.0, 0.0, 1.0])
