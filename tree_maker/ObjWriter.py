"""
Has 2 classes reasonable to use outside of this file: ObjWriter and Vertex\n
ObjWriter handles writing MeshBuffers to an obj file, one group per mesh.\n
Vertex is meant for internal use to track indices of verts, cords, and norms. \n

>================| Key Words |================<\n
vert -> vertex -> "v" in obj\n
cord -> vertex texture coordinate -> "vt" in obj\n
norm -> vertex normal -> "vn" in obj\n
face -> face -> "f" in obj\n
comment -> comment -> "#" in obj
"""

from typing import Dict, List, TextIO, Tuple, Union

from tree_maker.Mesh import MeshBuffers


def round_float(value: float, rounding: int) -> str:
    """Format the float with the specified number of decimal places"""
    formatted_value = f"{value:.{rounding}f}"
    # Remove trailing zeros and possible trailing decimal point
    result = formatted_value.rstrip('0').rstrip('.') if '.' in formatted_value else formatted_value
    if result == "-0": return "0"
    return result


class Vertex:
    """Tracks indices of verts, cords, and norms\n
    aka vertex indices, vertex texture coordinate indices, and vertex normal indices"""
    vertIndex: int
    cordIndex: int
    normIndex: int

    def __init__(self, vertIndex: int, cordIndex: int, normIndex: int):
        self.vertIndex = vertIndex
        self.cordIndex = cordIndex
        self.normIndex = normIndex

    def __add__(self, other: Union['Vertex', int, Tuple[int, int, int]]) -> 'Vertex':
        if isinstance(other, Vertex):
            return Vertex(self.vertIndex + other.vertIndex, self.cordIndex + other.cordIndex, self.normIndex + other.normIndex)
        elif isinstance(other, int):
            return Vertex(self.vertIndex + other, self.cordIndex + other, self.normIndex + other)
        else:
            return Vertex(self.vertIndex + other[0], self.cordIndex + other[1], self.normIndex + other[2])

    def __repr__(self):
        return f"Vertex<{self.vertIndex} {self.cordIndex} {self.normIndex}>"


class ObjWriter:
    """
    handles writing to an obj file.
    methods that start with `_add` dont update `offset` and directly modify the file.
    methods that start with `write` must update `offset` and call various `_add` methods.

    A note on offsets:
    In objs, the index of a vert, cord, and norm all need to be tracked for when creating faces.
    These numbers are independent of each other and start at 1.
    Every mesh written after the first is shifted along by what was written before it - that shift is the offset.

    cords and norms are 'cached':
    if a cord/norm with given values (after rounding) has already been saved to the obj file, it will not add another identical one and will instead reuse the previous cord/norm.
    A 'fake' index (counting every call to _addCord/_addNorm) maps to the 'real' index written in the file through real_cord_cache/real_norm_cache.
    Twig quads all share the same four cords and tube rings repeat the same handful of normals around the trunk, so this keeps files a good bit smaller.
    Verts are never cached - two branches that happen to touch should stay separate.
    """

    fp: TextIO
    offset: Vertex
    """fake indices of the next vert, cord and norm"""
    real_cord_cache: Dict[Union[str, int], int]
    """str is the UV position (rounded values with space between as a string) which maps to a real index
    int is a fake index which maps to a real index"""
    _real_cord_offset: int
    real_norm_cache: Dict[Union[str, int], int]
    """str is the normal (rounded values with space between as a string) which maps to a real index
    int is a fake index which maps to a real index"""
    _real_norm_offset: int
    vert_rounding: int
    cord_rounding: int
    norm_rounding: int

    def __init__(self, fp: TextIO, title: str = "", vert_rounding: int = 5, cord_rounding: int = 4, norm_rounding: int = 3) -> None:
        """A recommended way to start this is:\n
        with open("output.obj", "w") as fp:\n
            obj = ObjWriter(fp)\n
        vert_rounding, cord_rounding, norm_rounding are how many places the numbers of each type should be rounded to.
        title is optional and will just add a comment at the top of the obj with it
        """
        self.fp = fp
        self.offset = Vertex(1, 1, 1)
        self.real_cord_cache = {}
        self._real_cord_offset = 1
        self.real_norm_cache = {}
        self._real_norm_offset = 1
        self.vert_rounding = vert_rounding
        self.cord_rounding = cord_rounding
        self.norm_rounding = norm_rounding
        if title != "":
            self._addComment(title)

    def _addVert(self, x: float, y: float, z: float) -> None:
        """Adds a vert aka vertex. Does not increment self.offset.vertIndex"""
        self.fp.write(f"v {round_float(x, self.vert_rounding)} {round_float(y, self.vert_rounding)} {round_float(z, self.vert_rounding)}\n")

    def _addCord(self, fake_index: int, u: float, v: float) -> None:
        """Adds a cord aka vertex texture coordinate under fake_index, reusing an identical one if it was written before"""
        result = f"{round_float(u, self.cord_rounding)} {round_float(v, self.cord_rounding)}"
        if result in self.real_cord_cache:
            self.real_cord_cache[fake_index] = self.real_cord_cache[result]
        else:
            self.real_cord_cache[result] = self._real_cord_offset
            self.real_cord_cache[fake_index] = self._real_cord_offset
            self._real_cord_offset += 1
            self.fp.write(f"vt {result}\n")

    def _addNorm(self, fake_index: int, x: float, y: float, z: float) -> None:
        """Adds a norm aka vertex normal under fake_index, reusing an identical one if it was written before"""
        result = f"{round_float(x, self.norm_rounding)} {round_float(y, self.norm_rounding)} {round_float(z, self.norm_rounding)}"
        if result in self.real_norm_cache:
            self.real_norm_cache[fake_index] = self.real_norm_cache[result]
        else:
            self.real_norm_cache[result] = self._real_norm_offset
            self.real_norm_cache[fake_index] = self._real_norm_offset
            self._real_norm_offset += 1
            self.fp.write(f"vn {result}\n")

    def _addFace(self, corners: List[Vertex]) -> None:
        """corners are relative to self.offset. The cord and norm indices placed in the file are the 'real' ones"""
        face = "f"
        for corner in corners:
            index = corner + self.offset
            real_cord = self.real_cord_cache[index.cordIndex]
            real_norm = self.real_norm_cache[index.normIndex]
            face += f" {index.vertIndex}/{real_cord}/{real_norm}"
        self.fp.write(face + "\n")

    def _addComment(self, comment: str) -> None:
        self.fp.write(f"# {comment}\n")

    def writeComment(self, comment: str) -> None:
        """its just an atlas for _addComment"""
        self._addComment(comment)

    def writeMesh(self, mesh: MeshBuffers, name: str) -> None:
        """Writes mesh as the group `name`. Every vert has its own cord and norm so the three indices of a corner match before caching"""
        self.fp.write(f"g {name}\n")
        if mesh.is_empty():
            return

        positions = mesh.positions.reshape(-1, 3).tolist()
        normals = mesh.normals.reshape(-1, 3).tolist()
        uvs = mesh.uvs.reshape(-1, 2).tolist()

        for x, y, z in positions:
            self._addVert(x, y, z)
        for index, (u, v) in enumerate(uvs):
            self._addCord(self.offset.cordIndex + index, u, v)
        for index, (x, y, z) in enumerate(normals):
            self._addNorm(self.offset.normIndex + index, x, y, z)

        for a, b, c in mesh.indices.reshape(-1, 3).tolist():
            self._addFace([Vertex(a, a, a), Vertex(b, b, b), Vertex(c, c, c)])

        self.offset += mesh.vertex_count
