"""
Turns a Skeleton into a TreeMesh.\n
Branches become tubes: a ring of `segments` verts per section, neighbouring rings stitched with two triangles per segment.
A child's first ring is the parent's ring at the section it grows from, so there is no gap where they meet.
Twigs become one quad each.
"""

import logging
from typing import Dict, List, Optional, Tuple

import numpy as np
from scipy.spatial.transform import Rotation

from tree_maker.Branch import Branch, TwigPlacement
from tree_maker.Mesh import MeshBuffers, MeshBuilder, TreeMesh
from tree_maker.Normalizer import NormalizedProperties
from tree_maker.Ring import Ring
from tree_maker.Skeleton import Skeleton
from tree_maker.Tube import Tube

_LOGGER = logging.getLogger(__name__)


class EmittedRing:
    """what a child needs to know about a parent ring to start from it"""
    first_vertex: int
    rotation: Rotation
    along: float
    """distance from the bottom of the trunk following the branches - v before v_multiplier"""

    def __init__(self, first_vertex: int, rotation: Rotation, along: float):
        self.first_vertex = first_vertex
        self.rotation = rotation
        self.along = along


def ring_strip(first_a: int, first_b: int, segments: int) -> np.ndarray:
    """(2 * segments, 3) triangles joining ring a to the ring b after it, facing out"""
    k = np.arange(segments)
    k_next = (k + 1) % segments
    a, a_next = first_a + k, first_a + k_next
    b, b_next = first_b + k, first_b + k_next
    first = np.stack([a, a_next, b_next], axis=1)
    second = np.stack([a, b_next, b], axis=1)
    return np.stack([first, second], axis=1).reshape(-1, 3)


def emit_branch(builder: MeshBuilder, branch: Branch, segments: int, v_multiplier: float, rings: Dict[Tuple[int, int], EmittedRing]) -> None:
    """writes one branch's rings and strips into builder and remembers every ring it writes in `rings`"""
    start: Optional[EmittedRing] = None
    if branch.parent is not None:
        start = rings[(branch.parent, branch.parent_section)]

    tube = Tube([Ring(section.position, section.radius) for section in branch.sections])
    tube.apply_parallel_transport(
        [section.direction for section in branch.sections],
        start.rotation if start is not None else None
    )
    start_along = start.along if start is not None else 0.0
    u = np.arange(segments) / segments

    previous_first: Optional[int] = None
    for ring_index, ring in enumerate(tube):
        along = start_along + tube.lengths[ring_index]
        if ring_index == 0 and start is not None:
            first = start.first_vertex
        else:
            normals = ring.radial_directions(segments)
            positions = ring.convert_to_verts(segments)
            uvs = np.stack([u, np.full(segments, along * v_multiplier)], axis=1)
            first = builder.add_vertices(positions, normals, uvs)
        rings[(branch.handle, ring_index)] = EmittedRing(first, ring.rotation, along)

        if previous_first is not None:
            builder.add_triangles(ring_strip(previous_first, first, segments))
        previous_first = first


def emit_twig(builder: MeshBuilder, twig: TwigPlacement, size: float) -> None:
    """a size x size quad standing on the placement, growing along the branch"""
    width = twig.width_axis().np() * (size / 2)
    length = twig.length_axis().np() * size
    base = twig.position.np()
    positions = np.array([
        base - width,
        base + width,
        base + width + length,
        base - width + length,
    ])
    normals = np.tile(twig.normal.np(), (4, 1))
    uvs = np.array([[0, 0], [1, 0], [1, 1], [0, 1]], dtype=float)
    first = builder.add_vertices(positions, normals, uvs)
    builder.add_triangles(first + np.array([0, 1, 2, 0, 2, 3]))


def emit_mesh(skeleton: Skeleton, normalized: NormalizedProperties) -> TreeMesh:
    """the branch mesh and the twig mesh of skeleton. An empty skeleton gives two empty meshes"""
    if skeleton.is_empty():
        return TreeMesh(MeshBuffers.empty(), MeshBuffers.empty())
    properties = normalized.properties

    branch_builder = MeshBuilder()
    rings: Dict[Tuple[int, int], EmittedRing] = {}
    for branch in skeleton.walk():
        emit_branch(branch_builder, branch, properties.segments, properties.v_multiplier, rings)

    twig_builder = MeshBuilder()
    for twig in skeleton.twigs:
        emit_twig(twig_builder, twig, properties.twig_scale)

    tree = TreeMesh(branch_builder.build(), twig_builder.build())
    _LOGGER.debug("Emitted %r", tree)
    return tree


def ring_vertex_count(skeleton: Skeleton, segments: int) -> int:
    """how many verts emit_mesh writes for the branches of skeleton - every section but a child's first gets a ring"""
    rings: List[int] = [len(branch.sections) - (0 if branch.is_trunk() else 1) for branch in skeleton]
    return sum(rings) * segments
