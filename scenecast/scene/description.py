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
Publication of multi body descriptions (robot description files and the like).

The description is parsed elsewhere and presented as links, each with the geometries that represent it, and
joints, each giving the pose of a child link relative to its parent link. Every link and every joint becomes a
node of the scene graph:

    /<root link>/<joint>/<child link>/<next joint>/...

Link nodes hold the geometries, joint nodes hold the transforms, so that moving a joint later only requires a
set_transform on its path.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Dict, Iterable, List, Optional, Sequence, TYPE_CHECKING

from scenecast.scene import transforms
from scenecast.scene.geometry import Geometry
from scenecast.scene.lumped import assemble
from scenecast.scene.material import Material

if TYPE_CHECKING:
    from scenecast.broadcaster.client import Client

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Link:
    name: str
    visuals: Sequence[Geometry] = ()
    material: Optional[Material] = None


@dataclass(frozen=True, eq=False)
class Joint:
    name: str
    parent: str
    child: str
    origin: transforms.Pose = field(default_factory=transforms.identity)

    def __post_init__(self):
        object.__setattr__(self, "origin", transforms.as_pose(self.origin))


@dataclass
class DescriptionPaths:
    links: Dict[str, str] = field(default_factory=dict)
    joints: Dict[str, str] = field(default_factory=dict)

    def all(self) -> List[str]:
        return [*self.links.values(), *self.joints.values()]


def compute_paths(links: Iterable[Link], joints: Iterable[Joint], prefix: str = "") -> DescriptionPaths:
    """
    Scene paths of all links and joints. Links that are the child of no joint are roots, placed under prefix.
    """
    joints = list(joints)
    joint_of_child: Dict[str, Joint] = {}
    for joint in joints:
        if joint.child in joint_of_child:
            raise ValueError(f"Link {joint.child} is the child of several joints")
        joint_of_child[joint.child] = joint

    paths = DescriptionPaths()

    def link_path(name: str, visiting: frozenset) -> str:
        if name in paths.links:
            return paths.links[name]
        if name in visiting:
            raise ValueError(f"Cycle in description through link {name}")
        joint = joint_of_child.get(name)
        if joint is None:
            path = f"{prefix}/{name}"
        else:
            path = f"{joint_path(joint, visiting | {name})}/{name}"
        paths.links[name] = path
        return path

    def joint_path(joint: Joint, visiting: frozenset) -> str:
        if joint.name not in paths.joints:
            paths.joints[joint.name] = f"{link_path(joint.parent, visiting)}/{joint.name}"
        return paths.joints[joint.name]

    for link in links:
        link_path(link.name, frozenset())
    for joint in joints:
        joint_path(joint, frozenset())
        link_path(joint.child, frozenset())
    return paths


def publish(client: Client, links: Iterable[Link], joints: Iterable[Joint], prefix: str = "") -> DescriptionPaths:
    """
    Replace a description in the viewer: delete the previous nodes, then set link objects and joint transforms.
    """
    links = list(links)
    joints = list(joints)
    paths = compute_paths(links, joints, prefix)

    # Assembled before any command is sent
    objects = [
        (paths.links[link.name], assemble(link.visuals, material=link.material)) for link in links if link.visuals
    ]

    for path in paths.all():
        client.delete(path)
    for path, lumped in objects:
        client.set_object(path, lumped)
    for joint in joints:
        client.set_transform(paths.joints[joint.name], joint.origin)

    logger.info("Published %d links and %d joints under '%s'", len(links), len(joints), prefix or "/")
    return paths
