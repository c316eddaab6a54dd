"""
Grows a tree and writes it to {output}.obj (groups "branches" and "twigs") and {output}.obj.json (the skeleton and the properties).\n
python -m tree_maker --config my_tree.json --seed 3 --output output/tree
"""

import argparse
import json
import logging
import os
from typing import List, Optional

from tree_maker.Mesh import TreeMesh
from tree_maker.ObjWriter import ObjWriter
from tree_maker.Properties import DEFAULT_PROPERTIES, InvalidConfiguration, Properties
from tree_maker.Skeleton import Skeleton
from tree_maker.Tree import grow

_LOGGER = logging.getLogger(__name__)


def writeToJson(output: dict, path: str):
    """puts diction into a json file on the computer hard drive"""
    with open(path, mode="w", encoding="utf-8") as fp:
        json.dump(output, fp)


def writeObj(tree: TreeMesh, obj: ObjWriter) -> None:
    obj.writeMesh(tree.branch_mesh, "branches")
    obj.writeMesh(tree.twig_mesh, "twigs")


def writeEverything(tree: TreeMesh, skeleton: Skeleton, properties: Properties, name: str = "output") -> None:
    "Exports the tree as a obj and its skeleton as a json file all in one go."
    directory = os.path.dirname(name)
    if directory != "":
        os.makedirs(directory, exist_ok=True)
    with open(f"{name}.obj", "w") as fp:
        obj = ObjWriter(fp, os.path.basename(name))
        obj.writeComment(f"seed {properties.seed} levels {properties.levels}")
        writeObj(tree, obj)
    writeToJson({"properties": properties.toDict(), "skeleton": skeleton.toDict()}, f"{name}.obj.json")
    _LOGGER.info("Wrote %s.obj and %s.obj.json", name, name)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Grow a procedural tree and export it as an obj.")
    parser.add_argument("--config", type=str, default=None, help="json file of tree properties (camelCase or snake_case keys)")
    parser.add_argument("--seed", type=int, default=None, help="overrides the seed of the config")
    parser.add_argument("--levels", type=int, default=None, help="overrides the branching levels of the config")
    parser.add_argument("--output", type=str, default="output/tree", help="path of the files to write, without extension")
    parser.add_argument("--verbose", action="store_true", help="log every stage of the generation")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    try:
        properties = Properties.from_json(args.config) if args.config else DEFAULT_PROPERTIES
        if args.seed is not None:
            properties = properties.replace(seed=args.seed)
        if args.levels is not None:
            properties = properties.replace(levels=args.levels)
        skeleton, tree = grow(properties)
    except InvalidConfiguration as error:
        _LOGGER.error("Bad tree properties: %s", error)
        return 2

    writeEverything(tree, skeleton, properties, args.output)
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
