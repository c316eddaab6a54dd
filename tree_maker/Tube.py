"""
Tube is a bunch of rings in a row - just List[Ring] plus some helper methods
"""

from typing import Iterator, List, Optional

import numpy as np
from scipy.spatial.transform import Rotation

from tree_maker.Ring import Ring
from tree_maker.Vec3 import Vec3


class Tube:
    """A bunch of rings in a row - just List[Ring] plus some helper methods"""
    rings: List[Ring]
    """a list of rings. note: you can do `tube[i]` instead of `tube.rings[i]`"""
    lengths: List[float]
    """distance from the first ring, following the rings"""

    def __init__(self, rings: List[Ring]):
        self.rings = rings
        self.compute_lengths()

    def is_empty(self) -> bool:
        return len(self) == 0

    def compute_lengths(self) -> None:
        """Every item is the distance from a ring (of relative index in self.rings) to the beginning. The length follows the path."""
        self.lengths = []
        if self.is_empty(): return
        current = 0.0
        previous: Vec3 = self[0].center
        for ring in self:
            current += (ring.center - previous).magnitude()
            self.lengths.append(current)
            previous = ring.center

    def __iter__(self) -> Iterator[Ring]:
        """`for ring in tube` looks nicer than `for ring in tube.rings`"""
        return iter(self.rings)

    def __getitem__(self, index: int) -> Ring:
        """`tube[i]` looks nicer than `tube.rings[i]`"""
        return self.rings[index]

    def __len__(self) -> int:
        """`len(tube)` looks nicer than `len(tube.rings)`"""
        return len(self.rings)

    def apply_parallel_transport(self, tangents: List[Vec3], start_rotation: Optional[Rotation] = None) -> None:
        """Modifies this tube directly.\n
        Sets every ring's rotation so ring i faces tangents[i] while rolling around it as little as possible.\n
        The first ring gets start_rotation if it is given (and then faces whatever that rotation faces - tangents[0] is ignored),
        otherwise an arbitrary rotation facing tangents[0].\n
        After being carried along, each frame is squared up again against its tangent so rounding never builds up into a twist."""
        if len(tangents) != len(self.rings):
            raise ValueError(f"Need one tangent per ring, got {len(tangents)} for {len(self.rings)}")

        previous_tangent: Optional[Vec3] = None
        previous_rotation: Optional[Rotation] = None

        for ring_index, ring in enumerate(self.rings):
            if ring_index == 0:
                if start_rotation is not None:
                    ring.rotation = start_rotation
                else:
                    ring.rotation = tangents[0].normalize().to_arbitrary_rotation()
                previous_rotation = ring.rotation
                previous_tangent = ring.tangent
                continue

            tangent_vector = tangents[ring_index].normalize()
            # the change in tangent from the previous ring becomes a rotation that is applied on top of the previous rotation
            carried = tangent_vector.to_rotation_using_parallel_transport(previous_rotation, previous_tangent)
            ring.rotation = Tube._squared_up(tangent_vector, Vec3.Y() * carried)

            previous_rotation = ring.rotation
            previous_tangent = tangent_vector

    @staticmethod
    def _squared_up(tangent: Vec3, side: Vec3) -> Rotation:
        """the rotation facing tangent whose side is as close to `side` as can be"""
        side = side.reject(tangent).normalize_or_zero()
        if side.magnitude() == 0:
            side = tangent.to_arbitrary_perpendicular()
        binormal = tangent.cross(side)
        matrix = np.array([tangent.np(), side.np(), binormal.np()]).T
        return Rotation.from_matrix(matrix)

    def __repr__(self) -> str:
        result = "Tube<"
        for index, ring in enumerate(self.rings):
            result += f"\n\t{ring} length:{self.lengths[index]},"
        result += "\n>"
        return result
