"""
A utility to represent 3d positions and directions of the tree skeleton\n
can be used as a 3 sized list\n
Vec3(1,0,0) * Rotation returns a rotated Vec3\n
Vec3(1,0,0).np() gives a numpy array\n
Vec3(*np.array([1,0,0])) to convert from np array to Vec3\n
+Y is up, the trunk grows along it
"""

from typing import Iterator, Union
import math
from scipy.spatial.transform import Rotation
import numpy as np


class Vec3:
    """
    A 3d position or direction\n
    can be added, subtracted multiplied and divided as you otherwise expect\n
    rotations come from scipy so they can be chained with ring frames
    """

    x: float
    y: float
    z: float

    def __init__(self, x: float, y: float, z: float):
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)

    def __add__(self, other: 'Vec3') -> 'Vec3':
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: 'Vec3') -> 'Vec3':
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> 'Vec3':
        return Vec3(-self.x, -self.y, -self.z)

    def __mul__(self, other: Union['Vec3', float, int, Rotation]) -> 'Vec3':
        """Multiplying by vector does pairwise multiplication.\n
        Multiplying by a float/int multiplies all values.\n
        Multiplying by a rotation transforms the vector by the rotation."""
        if isinstance(other, Vec3):
            return Vec3(self.x * other.x, self.y * other.y, self.z * other.z)
        elif isinstance(other, (int, float, np.floating)):
            return Vec3(self.x * other, self.y * other, self.z * other)
        elif isinstance(other, Rotation):
            return self.transform(other)
        else:
            raise TypeError("Unsupported operand type(s) for *: 'Vec3' and '{}'".format(type(other).__name__))

    def __rmul__(self, other: Union['Vec3', float, int, Rotation]) -> 'Vec3':
        return self.__mul__(other)

    def __truediv__(self, other: Union['Vec3', float, int]) -> 'Vec3':
        """dividing by a vector does pair wise division\n
        dividing by a float/int divides all of the vector by that value"""
        if isinstance(other, Vec3):
            return Vec3(self.x / other.x, self.y / other.y, self.z / other.z)
        elif isinstance(other, (int, float, np.floating)):
            if other == 0:
                raise ZeroDivisionError("Division by zero is not allowed")
            return Vec3(self.x / other, self.y / other, self.z / other)
        else:
            raise TypeError("Unsupported operand type(s) for /: 'Vec3' and '{}'".format(type(other).__name__))

    def __getitem__(self, index: int) -> float:
        if index == 0:
            return self.x
        elif index == 1:
            return self.y
        elif index == 2:
            return self.z
        else:
            raise IndexError(f"Index {index} out of range Vec3")

    def __len__(self) -> int:
        return 3

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __eq__(self, other) -> bool:
        return isinstance(other, Vec3) and self.x == other.x and self.y == other.y and self.z == other.z

    def np(self) -> np.ndarray:
        """Convert to a numpy array"""
        return np.array([self.x, self.y, self.z], dtype=float)

    def magnitude(self) -> float:
        """Returns the distance Vec3 is from the zero vector.\n
        To get the distance two vectors are from each other you can use (self - other).magnitude()"""
        return math.sqrt(self.x**2 + self.y**2 + self.z**2)

    def normalize_or_zero(self) -> 'Vec3':
        """If the magnitude of self is zero, return zero vector.\n
        Otherwise returns a vector pointing the same direction as self but with a magnitude of 1"""
        mag = self.magnitude()
        if mag == 0:
            return Vec3.zero()
        return Vec3(self.x / mag, self.y / mag, self.z / mag)

    @staticmethod
    def zero() -> 'Vec3':
        """Vec3(0,0,0)"""
        return Vec3(0, 0, 0)

    def normalize(self) -> 'Vec3':
        """ Returns a vector that points the same direction as self but has a magnitude of 1.\n
        !!NOTICE!! Self must not have a magnitude of 0. You can use normalize_or_zero() in that case."""
        mag = self.magnitude()
        if mag == 0:
            raise ValueError("Cannot normalize a zero vector")
        return Vec3(self.x / mag, self.y / mag, self.z / mag)

    def __repr__(self) -> str:
        return f"Vec3<{self.x}, {self.y}, {self.z}>"

    def cross(self, other: 'Vec3') -> 'Vec3':
        """Returns a vector perpendicular to both self and other."""
        return Vec3(
            self.y*other.z - self.z*other.y,
            self.z*other.x - self.x*other.z,
            self.x*other.y - self.y*other.x
        )

    def dot(self, other: 'Vec3') -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def reject(self, axis: 'Vec3') -> 'Vec3':
        """The part of self perpendicular to axis (axis must be normalized).\n
        Used to square a frame back up after it has been carried to a new direction."""
        return self - axis * self.dot(axis)

    def practically_the_same_as(self, other: 'Vec3') -> bool:
        """If the self and other are < 0.0001 apart"""
        return (self - other).magnitude() < 1e-4

    def lerp(self, other: 'Vec3', t: float) -> 'Vec3':
        """Linear interpolation between start and end based on t."""
        return self * (1 - t) + other * t

    def transform(self, rotation: Rotation) -> 'Vec3':
        """Rotate a self by a rotation. You can also self * rotation to do the same thing."""
        np_result = rotation.apply(self.np())
        return Vec3(*np_result)

    def to_arbitrary_perpendicular(self) -> 'Vec3':
        """Returns a Vec3 with the same magnitude that is perpendicular to self.\n
        !!NOTICE!! A continuous input does not yield a continuous output! Carry frames along with to_rotation_using_parallel_transport instead."""
        mag = self.magnitude()
        # cross with whichever axis is furthest from self so the result never collapses
        if abs(self.y) > 0.9 * mag:
            arbitrary = Vec3.X()
        else:
            arbitrary = Vec3.Y()
        return self.cross(arbitrary).normalize() * mag

    def to_arbitrary_rotation(self) -> Rotation:
        """Returns a rotation that turns +X to face the direction of self.\n
        !!NOTICE!! The 'roll' or 'up-direction' of the output is arbitrary."""
        return Vec3.X().get_rotation_to(self)

    def get_rotation_to(self, other: 'Vec3') -> Rotation:
        """returns the smallest rotation from self to other"""
        normalized_previous = self.normalize()
        normalized_new = other.normalize()

        if normalized_new.practically_the_same_as(normalized_previous):
            return Rotation.identity()

        if normalized_new.practically_the_same_as(-normalized_previous):
            axis = normalized_new.to_arbitrary_perpendicular()
            return Rotation.from_rotvec(axis.np() * math.pi) # something that is a complete flip

        rotation_axis = normalized_previous.cross(normalized_new).normalize()
        rotation_angle = math.acos(max(-1.0, min(1.0, normalized_previous.dot(normalized_new))))

        return Rotation.from_rotvec(rotation_angle * rotation_axis.np())

    def to_rotation_using_parallel_transport(self, prev_rotation: Rotation, previous_tangent: 'Vec3') -> Rotation:
        """ returns a rotation that points in self direction, but only rolls the minimum amount\n
        the rotational transformation from previous_tangent to self (new_tangent) is applied to prev_rotation and that is returned"""
        return previous_tangent.get_rotation_to(self) * prev_rotation

    def rotate_around(self, axis: 'Vec3', rotation: float) -> 'Vec3':
        """Returns a Vec3 of self rotated around axis by rotation (in radians)"""
        return self * Rotation.from_rotvec((axis.normalize_or_zero() * rotation).np())

    def toDict(self) -> dict:
        """Returns {"x": ??, "y": ??, "z": ??} where the ?? are the values of self"""
        return {
            "x": self.x,
            "y": self.y,
            "z": self.z,
        }

    @staticmethod
    def X(value: float = 1) -> 'Vec3':
        """short for Vec3(1,0,0) or Vec3(value,0,0)"""
        return Vec3(value, 0, 0)

    @staticmethod
    def Y(value: float = 1) -> 'Vec3':
        """short for Vec3(0,1,0) or Vec3(0,value,0)"""
        return Vec3(0, value, 0)

    @staticmethod
    def Z(value: float = 1) -> 'Vec3':
        """short for Vec3(0,0,1) or Vec3(0,0,value)"""
        return Vec3(0, 0, value)
