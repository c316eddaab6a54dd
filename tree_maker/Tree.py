"""
generate() is the whole generator: check the properties, grow a skeleton, turn it into meshes.\n
Nothing is kept between calls. Changing any property means calling it again and throwing the old meshes away.
"""

import logging
from typing import Any, Mapping, Tuple, Union

from tree_maker.Mesh import TreeMesh
from tree_maker.MeshEmitter import emit_mesh
from tree_maker.Normalizer import normalize
from tree_maker.Properties import Properties
from tree_maker.Skeleton import Skeleton
from tree_maker.SkeletonBuilder import build_skeleton

_LOGGER = logging.getLogger(__name__)


def _as_properties(config: Union[Properties, Mapping[str, Any]]) -> Properties:
    if isinstance(config, Properties):
        return config
    return Properties.from_dict(config)


def grow(config: Union[Properties, Mapping[str, Any]]) -> Tuple[Skeleton, TreeMesh]:
    """Same as generate() but also hands back the skeleton the meshes were made from"""
    normalized = normalize(_as_properties(config))
    skeleton = build_skeleton(normalized)
    tree = emit_mesh(skeleton, normalized)
    _LOGGER.debug(
        "Generated tree seed=%d levels=%d: %d branches, %d twigs, %d branch verts, %d twig verts",
        normalized.seed, normalized.levels, len(skeleton), len(skeleton.twigs),
        tree.branch_mesh.vertex_count, tree.twig_mesh.vertex_count
    )
    return skeleton, tree


def generate(config: Union[Properties, Mapping[str, Any]]) -> TreeMesh:
    """config is a Properties or a dict of camelCase/snake_case parameters.\n
    Raises InvalidConfiguration before doing any work if a parameter is bad."""
    return grow(config)[1]
