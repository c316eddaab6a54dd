"""
The pieces a tree skeleton is made of: Section, Branch and TwigPlacement.\n
Branches point at each other with integer handles into a Skeleton, never with references.
"""

import math
from typing import List, Optional

from tree_maker.Vec3 import Vec3


class Section:
    """One point along a branch. The branch is a straight line from one section to the next"""
    position: Vec3
    direction: Vec3
    """normalized. The way the branch heads out of this section (the last section keeps the incoming way)"""
    radius: float

    def __init__(self, position: Vec3, direction: Vec3, radius: float):
        self.position = position
        self.direction = direction
        self.radius = radius

    def toDict(self) -> dict:
        return {
            "position": self.position.toDict(),
            "direction": self.direction.toDict(),
            "radius": self.radius,
        }

    def __repr__(self) -> str:
        return f"Section<{self.position} dir:{self.direction} r:{self.radius}>"


class Branch:
    handle: int
    """index of this branch in Skeleton.branches"""
    level: int
    """0 is the trunk"""
    sections: List[Section]
    parent: Optional[int]
    """handle of the branch this grew off of, None for the trunk"""
    parent_section: Optional[int]
    """which section of the parent this starts at. sections[0] sits on that section"""
    children: List[int]
    """handles, in the order they were grown"""
    terminal: bool
    """on the last level - twigs grow on these"""

    def __init__(self, handle: int, level: int, sections: List[Section], parent: Optional[int] = None, parent_section: Optional[int] = None, terminal: bool = False):
        if len(sections) < 2:
            raise ValueError(f"A branch needs at least 2 sections, got {len(sections)}")
        self.handle = handle
        self.level = level
        self.sections = sections
        self.parent = parent
        self.parent_section = parent_section
        self.children = []
        self.terminal = terminal

    def is_trunk(self) -> bool:
        return self.parent is None

    @property
    def start_radius(self) -> float:
        return self.sections[0].radius

    def radii(self) -> List[float]:
        return [section.radius for section in self.sections]

    def length(self) -> float:
        """length following the sections"""
        return sum(
            (after.position - before.position).magnitude()
            for before, after in zip(self.sections, self.sections[1:])
        )

    def toDict(self) -> dict:
        return {
            "handle": self.handle,
            "level": self.level,
            "parent": self.parent,
            "parent_section": self.parent_section,
            "children": list(self.children),
            "terminal": self.terminal,
            "sections": [section.toDict() for section in self.sections],
        }

    def __repr__(self) -> str:
        return f"Branch<#{self.handle} level:{self.level} sections:{len(self.sections)} children:{len(self.children)}>"


class TwigPlacement:
    """Where a twig quad goes on a terminal branch"""
    branch: int
    position: Vec3
    """on the surface of the branch"""
    normal: Vec3
    """normalized, which way the quad faces - out from the branch and a bit up"""
    tangent: Vec3
    """normalized, the way the branch runs at this spot"""

    def __init__(self, branch: int, position: Vec3, normal: Vec3, tangent: Vec3):
        self.branch = branch
        self.position = position
        self.normal = normal
        self.tangent = tangent

    def width_axis(self) -> Vec3:
        """across the quad, perpendicular to both the normal and the branch"""
        return self.tangent.cross(self.normal).normalize()

    def length_axis(self) -> Vec3:
        """up the quad, in its plane and roughly along the branch"""
        return self.normal.cross(self.width_axis())

    def toDict(self) -> dict:
        return {
            "branch": self.branch,
            "position": self.position.toDict(),
            "normal": self.normal.toDict(),
            "tangent": self.tangent.toDict(),
        }


def twig_count(length: float, twig_scale: float, density: float) -> int:
    """how many twigs a terminal branch of this length carries"""
    return math.ceil(length * twig_scale * density)
