"""
Plain containers for what a tree turns into: flat position/normal/uv/index arrays, ready to hand to a renderer.
"""

from typing import List

import numpy as np


class MeshBuffers:
    """
    - positions: float32, x y z per vertex
    - normals:   float32, x y z per vertex, length 1
    - uvs:       float32, u v per vertex
    - indices:   uint32, 3 per triangle, counterclockwise seen from the side the normals point to
    """
    positions: np.ndarray
    normals: np.ndarray
    uvs: np.ndarray
    indices: np.ndarray

    def __init__(self, positions: np.ndarray, normals: np.ndarray, uvs: np.ndarray, indices: np.ndarray):
        self.positions = np.ascontiguousarray(positions, dtype=np.float32).reshape(-1)
        self.normals = np.ascontiguousarray(normals, dtype=np.float32).reshape(-1)
        self.uvs = np.ascontiguousarray(uvs, dtype=np.float32).reshape(-1)
        self.indices = np.ascontiguousarray(indices, dtype=np.uint32).reshape(-1)

    @staticmethod
    def empty() -> 'MeshBuffers':
        """a mesh with nothing in it - still a valid mesh"""
        return MeshBuffers(np.zeros(0), np.zeros(0), np.zeros(0), np.zeros(0))

    @property
    def vertex_count(self) -> int:
        return len(self.positions) // 3

    @property
    def triangle_count(self) -> int:
        return len(self.indices) // 3

    def is_empty(self) -> bool:
        return self.vertex_count == 0

    def __repr__(self) -> str:
        return f"MeshBuffers<verts:{self.vertex_count} tris:{self.triangle_count}>"


class MeshBuilder:
    """Collects chunks of vertices and triangles and joins them into MeshBuffers at the end"""
    _positions: List[np.ndarray]
    _normals: List[np.ndarray]
    _uvs: List[np.ndarray]
    _indices: List[np.ndarray]
    vertex_count: int

    def __init__(self):
        self._positions = []
        self._normals = []
        self._uvs = []
        self._indices = []
        self.vertex_count = 0

    def add_vertices(self, positions: np.ndarray, normals: np.ndarray, uvs: np.ndarray) -> int:
        """(n,3), (n,3), (n,2). Returns the index the first of them got"""
        first = self.vertex_count
        self._positions.append(positions)
        self._normals.append(normals)
        self._uvs.append(uvs)
        self.vertex_count += len(positions)
        return first

    def add_triangles(self, indices: np.ndarray) -> None:
        """absolute vertex indices, (m,3) or flat"""
        self._indices.append(np.asarray(indices).reshape(-1))

    def build(self) -> MeshBuffers:
        if self.vertex_count == 0:
            return MeshBuffers.empty()
        return MeshBuffers(
            np.concatenate(self._positions),
            np.concatenate(self._normals),
            np.concatenate(self._uvs),
            np.concatenate(self._indices) if self._indices else np.zeros(0),
        )


class TreeMesh:
    """What generate() hands back. The two meshes share nothing"""
    branch_mesh: MeshBuffers
    twig_mesh: MeshBuffers

    def __init__(self, branch_mesh: MeshBuffers, twig_mesh: MeshBuffers):
        self.branch_mesh = branch_mesh
        self.twig_mesh = twig_mesh

    def __repr__(self) -> str:
        return f"TreeMesh<branches:{self.branch_mesh} twigs:{self.twig_mesh}>"
