import io
import json
import os
import tempfile
import unittest

import numpy as np

from tree_maker.Mesh import MeshBuffers
from tree_maker.ObjWriter import ObjWriter, Vertex, round_float
from tree_maker.Properties import DEFAULT_PROPERTIES
from tree_maker.generate_tree import main

def quad(x: float) -> MeshBuffers:
    positions = np.array([[x, 0, 0], [x + 1, 0, 0], [x + 1, 1, 0], [x, 1, 0]])
    normals = np.tile([0, 0, 1], (4, 1))
    uvs = np.array([[0, 0], [1, 0], [1, 1], [0, 1]])
    return MeshBuffers(positions, normals, uvs, np.array([0, 1, 2, 0, 2, 3]))

def lines_starting_with(text: str, start: str):
    return [line for line in text.splitlines() if line.startswith(start + " ")]

class TestObjWriter(unittest.TestCase):

    def test_round_float(self):
        self.assertEqual(round_float(1.23456789, 3), "1.235")
        self.assertEqual(round_float(2.0, 3), "2")
        self.assertEqual(round_float(-0.00001, 3), "0")

    def test_vertex_add(self):
        self.assertEqual(repr(Vertex(1, 2, 3) + 1), "Vertex<2 3 4>")
        self.assertEqual(repr(Vertex(1, 2, 3) + (1, 0, 0)), "Vertex<2 2 3>")

    def test_one_mesh(self):
        fp = io.StringIO()
        obj = ObjWriter(fp, "test")
        obj.writeMesh(quad(0), "twigs")
        text = fp.getvalue()
        self.assertTrue(text.startswith("# test\ng twigs\n"))
        self.assertEqual(len(lines_starting_with(text, "v")), 4)
        self.assertEqual(len(lines_starting_with(text, "vt")), 4)
        self.assertEqual(len(lines_starting_with(text, "vn")), 1)
        self.assertEqual(lines_starting_with(text, "f"), ["f 1/1/1 2/2/1 3/3/1", "f 1/1/1 3/3/1 4/4/1"])

    def test_second_mesh_is_offset(self):
        fp = io.StringIO()
        obj = ObjWriter(fp)
        obj.writeMesh(quad(0), "a")
        obj.writeMesh(quad(5), "b")
        text = fp.getvalue()
        self.assertEqual(len(lines_starting_with(text, "v")), 8)
        # the second quad reuses the cords and norm of the first
        self.assertEqual(len(lines_starting_with(text, "vt")), 4)
        self.assertEqual(len(lines_starting_with(text, "vn")), 1)
        self.assertEqual(lines_starting_with(text, "f")[2], "f 5/1/1 6/2/1 7/3/1")

    def test_empty_mesh(self):
        fp = io.StringIO()
        obj = ObjWriter(fp)
        obj.writeMesh(MeshBuffers.empty(), "twigs")
        obj.writeMesh(quad(0), "branches")
        self.assertEqual(lines_starting_with(fp.getvalue(), "f")[0], "f 1/1/1 2/2/1 3/3/1")

class TestGenerateTree(unittest.TestCase):

    def test_main_writes_obj_and_json(self):
        with tempfile.TemporaryDirectory() as directory:
            name = os.path.join(directory, "out", "tree")
            self.assertEqual(main(["--levels", "1", "--seed", "5", "--output", name]), 0)
            with open(f"{name}.obj", encoding="utf-8") as fp:
                text = fp.read()
            self.assertIn("g branches\n", text)
            self.assertIn("g twigs\n", text)
            with open(f"{name}.obj.json", encoding="utf-8") as fp:
                data = json.load(fp)
            self.assertEqual(data["properties"]["seed"], 5)
            self.assertEqual(data["properties"]["levels"], 1)
            self.assertGreater(len(data["skeleton"]["branches"]), 1)

    def test_main_reads_config(self):
        with tempfile.TemporaryDirectory() as directory:
            config = os.path.join(directory, "tree.json")
            with open(config, "w", encoding="utf-8") as fp:
                json.dump(DEFAULT_PROPERTIES.replace(levels=0).toDict(), fp)
            name = os.path.join(directory, "tree")
            self.assertEqual(main(["--config", config, "--output", name]), 0)
            with open(f"{name}.obj.json", encoding="utf-8") as fp:
                data = json.load(fp)
            self.assertEqual(len(data["skeleton"]["branches"]), 1)

    def test_main_rejects_bad_properties(self):
        with tempfile.TemporaryDirectory() as directory:
            name = os.path.join(directory, "tree")
            self.assertEqual(main(["--levels", "-1", "--output", name]), 2)
            self.assertFalse(os.path.exists(f"{name}.obj"))

if __name__ == '__main__':
    unittest.main()
