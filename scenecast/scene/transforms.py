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
Homogeneous pose helpers.

A pose is a 4x4 float numpy array. The rotation is the upper left 3x3 block and the translation is
the last column, m[:3, 3]. Poses compose with the matrix product: parent @ child.
"""
import math
from typing import Iterable, Tuple

import numpy as np

Pose = np.ndarray


def identity() -> Pose:
    return np.identity(4)


def as_pose(matrix) -> Pose:
    """Return a float copy of matrix, checking it is 4x4."""
    pose = np.array(matrix, dtype=float)
    if pose.shape != (4, 4):
        raise ValueError(f"Expected a 4x4 homogeneous matrix, got shape {pose.shape}")
    return pose


def translation(x: float, y: float, z: float) -> Pose:
    pose = identity()
    pose[:3, 3] = (x, y, z)
    return pose


def rotation_x(angle: float) -> Pose:
    c, s = math.cos(angle), math.sin(angle)
    pose = identity()
    pose[1, 1] = c
    pose[1, 2] = -s
    pose[2, 1] = s
    pose[2, 2] = c
    return pose


def rotation_y(angle: float) -> Pose:
    c, s = math.cos(angle), math.sin(angle)
    pose = identity()
    pose[0, 0] = c
    pose[0, 2] = s
    pose[2, 0] = -s
    pose[2, 2] = c
    return pose


def rotation_z(angle: float) -> Pose:
    c, s = math.cos(angle), math.sin(angle)
    pose = identity()
    pose[0, 0] = c
    pose[0, 1] = -s
    pose[1, 0] = s
    pose[1, 1] = c
    return pose


def from_euler_angles(roll: float, pitch: float, yaw: float) -> Pose:
    """
    Rotation from roll, pitch and yaw, applied in that order about the fixed X, Y and Z axes.
    This is the convention of robot description files: R = Rz(yaw) Ry(pitch) Rx(roll).
    """
    return rotation_z(yaw) @ rotation_y(pitch) @ rotation_x(roll)


def from_quaternion(x: float, y: float, z: float, w: float) -> Pose:
    norm = math.sqrt(x * x + y * y + z * z + w * w)
    if norm == 0.0:
        raise ValueError("Zero quaternion")
    x, y, z, w = x / norm, y / norm, z / norm, w / norm
    pose = identity()
    pose[:3, :3] = [
        [1 - 2 * (y * y + z * z), 2 * (x * y - z * w), 2 * (x * z + y * w)],
        [2 * (x * y + z * w), 1 - 2 * (x * x + z * z), 2 * (y * z - x * w)],
        [2 * (x * z - y * w), 2 * (y * z + x * w), 1 - 2 * (x * x + y * y)],
    ]
    return pose


def quaternion_from_euler(roll: float, pitch: float, yaw: float) -> Tuple[float, float, float, float]:
    """Quaternion (x, y, z, w) for the same rotation as from_euler_angles()."""
    cr, sr = math.cos(roll / 2), math.sin(roll / 2)
    cp, sp = math.cos(pitch / 2), math.sin(pitch / 2)
    cy, sy = math.cos(yaw / 2), math.sin(yaw / 2)
    return (
        sr * cp * cy - cr * sp * sy,
        cr * sp * cy + sr * cp * sy,
        cr * cp * sy - sr * sp * cy,
        cr * cp * cy + sr * sp * sy,
    )


def isometry(xyz: Iterable[float] = (0.0, 0.0, 0.0), rpy: Iterable[float] = (0.0, 0.0, 0.0)) -> Pose:
    """Pose from a translation and roll, pitch, yaw angles, as found in description files."""
    pose = from_euler_angles(*rpy)
    pose[:3, 3] = tuple(xyz)
    return pose


def to_wire(pose: Pose):
    """Flat list of the 16 coefficients in column-major order, translation at 12, 13, 14."""
    return as_pose(pose).flatten(order="F").tolist()
