import math
import unittest

import numpy as np
from scipy.spatial.transform import Rotation

from tree_maker.Ring import Ring
from tree_maker.Tube import Tube
from tree_maker.Vec3 import Vec3

def bent_tube():
    centers = [Vec3(0, 0, 0), Vec3(0, 1, 0), Vec3(0.5, 1.8, 0.1), Vec3(1.4, 2.2, 0.4)]
    tangents = [(after - before).normalize() for before, after in zip(centers, centers[1:])]
    tangents.append(tangents[-1])
    tube = Tube([Ring(center, 0.2) for center in centers])
    tube.apply_parallel_transport(tangents)
    return tube, tangents

class TestRing(unittest.TestCase):

    def test_verts_sit_on_the_circle(self):
        ring = Ring(Vec3(1, 2, 3), 0.5, Vec3(1, 1, 0).to_arbitrary_rotation())
        verts = ring.convert_to_verts(7)
        self.assertEqual(verts.shape, (7, 3))
        offsets = verts - ring.center.np()
        self.assertTrue(np.allclose(np.linalg.norm(offsets, axis=1), 0.5))
        self.assertTrue(np.allclose(offsets @ ring.tangent.np(), 0))

    def test_first_vert_is_on_the_side(self):
        ring = Ring(Vec3.zero(), 2, Rotation.from_rotvec([0.3, -0.2, 0.9]))
        first = Vec3(*ring.convert_to_verts(5)[0])
        self.assertTrue(first.practically_the_same_as(ring.side * 2))

    def test_default_rotation(self):
        ring = Ring(Vec3.zero())
        self.assertEqual(ring.tangent, Vec3.X())

    def test_verts_turn_counterclockwise(self):
        ring = Ring(Vec3.zero(), 1)
        directions = ring.radial_directions(4)
        turn = Vec3(*directions[0]).cross(Vec3(*directions[1]))
        self.assertTrue(turn.practically_the_same_as(ring.tangent))

class TestTube(unittest.TestCase):

    def test_lengths(self):
        tube = Tube([Ring(Vec3.zero()), Ring(Vec3.Y(3)), Ring(Vec3(4, 3, 0))])
        self.assertEqual(tube.lengths, [0.0, 3.0, 7.0])
        self.assertTrue(Tube([]).is_empty())

    def test_rings_face_tangents(self):
        tube, tangents = bent_tube()
        for ring, tangent in zip(tube, tangents):
            self.assertTrue(ring.tangent.practically_the_same_as(tangent), f"Got {ring.tangent} expected {tangent}")

    def test_frames_are_orthonormal(self):
        tube, tangents = bent_tube()
        for ring in tube:
            matrix = ring.rotation.as_matrix()
            self.assertTrue(np.allclose(matrix.T @ matrix, np.eye(3), atol=1e-9))
            self.assertAlmostEqual(np.linalg.det(matrix), 1)

    def test_minimal_roll(self):
        tube, tangents = bent_tube()
        for before, after in zip(tube.rings, tube.rings[1:]):
            # the side of the next ring is the previous side carried over the bend, never spun around the tangent
            carried = before.side * before.tangent.get_rotation_to(after.tangent)
            self.assertTrue(after.side.practically_the_same_as(carried), f"Got {after.side} expected {carried}")

    def test_start_rotation(self):
        start = Rotation.from_rotvec([0, 0, math.tau / 4]) * Rotation.from_rotvec([math.tau / 8, 0, 0])
        tube = Tube([Ring(Vec3.zero()), Ring(Vec3.Y())])
        tube.apply_parallel_transport([Vec3.X(), Vec3.Y()], start)
        self.assertTrue(tube[0].rotation.approx_equal(start, 1e-9))
        self.assertTrue(tube[1].side.practically_the_same_as(tube[0].side))

    def test_tangent_count_must_match(self):
        tube = Tube([Ring(Vec3.zero()), Ring(Vec3.Y())])
        with self.assertRaises(ValueError):
            tube.apply_parallel_transport([Vec3.Y()])

if __name__ == '__main__':
    unittest.main()
