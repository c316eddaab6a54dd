"""
Ring is a circle in 3d space with a radius and optionally a rotation.\n
The rotation turns +X to the way the branch is heading, so the circle lies in the rotated YZ plane.
"""

import math
from typing import Optional

import numpy as np
from scipy.spatial.transform import Rotation

from tree_maker.Vec3 import Vec3


class Ring:
    """A circle in 3d space with a radius and optionally a rotation"""
    center: Vec3
    radius: float
    _rotation: Optional[Rotation]
    """use .rotation to get the rotation to not have to deal with none states"""

    def __init__(self, center: Vec3, radius: float = 0.1, rotation: Optional[Rotation] = None):
        self.center = center
        self.radius = radius
        self._rotation = rotation

    @property
    def rotation(self) -> Rotation:
        if self._rotation is None:
            return Rotation.identity()
        else:
            return self._rotation

    @rotation.setter
    def rotation(self, rotation: Rotation) -> None:
        self._rotation = rotation

    @property
    def tangent(self) -> Vec3:
        """the way the ring faces"""
        return Vec3.X() * self.rotation

    @property
    def side(self) -> Vec3:
        """where the first vert of the ring sits, relative to the center"""
        return Vec3.Y() * self.rotation

    def radial_directions(self, resolution: int) -> np.ndarray:
        """(resolution, 3) unit vectors from the center out to each vert. These are the vert normals too.\n
        Going up the index turns counterclockwise when looking back down the tangent."""
        radians = np.arange(resolution) / resolution * math.tau
        local = np.stack([np.zeros(resolution), np.cos(radians), np.sin(radians)], axis=1)
        return self.rotation.apply(local)

    def convert_to_verts(self, resolution: int) -> np.ndarray:
        """(resolution, 3) positions around the circle, starting at side"""
        return self.center.np() + self.radial_directions(resolution) * self.radius

    def __repr__(self) -> str:
        return f"Ring<Center:{self.center} Radius:{self.radius} Rotation:{self.rotation.as_euler('xyz')}>"
