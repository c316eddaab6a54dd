from tree_maker.Mesh import MeshBuffers, TreeMesh
from tree_maker.Properties import DEFAULT_PROPERTIES, InvalidConfiguration, Properties
from tree_maker.Tree import generate, grow

__all__ = [
    "DEFAULT_PROPERTIES",
    "InvalidConfiguration",
    "MeshBuffers",
    "Properties",
    "TreeMesh",
    "generate",
    "grow",
]
