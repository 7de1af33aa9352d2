#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Tests for the command-line entry point and tool descriptors.
"""
import contextlib
import io
import os
import tempfile
import unittest

import numpy as np
import rasterio

from raster_logic.cli import main, resolve_path, resolve_paths
from raster_logic.core.errors import InvalidInputError
from raster_logic.tools import get_tool

from raster_helpers import create_synthetic_boolean, expected_or, save_synthetic_raster

NODATA = -9999.0


class TestPathResolution(unittest.TestCase):

    def test_bare_name_joins_working_directory(self):
        wd = os.path.abspath(os.path.join(os.sep, "data", "rasters"))
        self.assertEqual(resolve_path("in1.tif", wd), os.path.join(wd, "in1.tif"))

    def test_quotes_are_stripped(self):
        wd = os.path.abspath(os.sep + "data")
        self.assertEqual(resolve_path("'in1.tif'", wd), os.path.join(wd, "in1.tif"))

    def test_path_with_directory_is_kept(self):
        path = os.path.abspath(os.path.join(os.sep, "other", "in1.tif"))
        self.assertEqual(resolve_path(path, os.sep + "data"), path)

    def test_missing_inputs(self):
        with self.assertRaises(InvalidInputError):
            resolve_paths(None, "b.tif", "o.tif")
        with self.assertRaises(InvalidInputError):
            resolve_paths("a.tif", None, "o.tif")
        with self.assertRaises(InvalidInputError):
            resolve_paths("a.tif", "b.tif", None)

    def test_unary_ignores_second_input(self):
        paths = resolve_paths("a.tif", None, "o.tif", working_directory=os.sep + "wd", unary=True)
        self.assertIsNone(paths.input2)


class TestTools(unittest.TestCase):

    def test_lookup(self):
        self.assertEqual(get_tool("OR").rule, "or")
        self.assertTrue(get_tool("not").unary)
        with self.assertRaises(InvalidInputError):
            get_tool("nand")

    def test_example_usage(self):
        usage = get_tool("Or").example_usage()
        self.assertIn("-r=Or", usage)
        self.assertIn("--input2='in2.tif'", usage)
        self.assertNotIn("--input2", get_tool("Not").example_usage())


class TestMain(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmpdir = self._tmp.name
        self.a = create_synthetic_boolean((20, 9), seed=21)
        self.b = create_synthetic_boolean((20, 9), seed=22)
        save_synthetic_raster(os.path.join(self.tmpdir, "in1.tif"), self.a)
        save_synthetic_raster(os.path.join(self.tmpdir, "in2.tif"), self.b)

    def tearDown(self):
        self._tmp.cleanup()

    def test_or_with_working_directory(self):
        code = main(["-r=Or", f"--wd={self.tmpdir}", "--input1=in1.tif",
                     "--input2=in2.tif", "-o=out.tif", "--workers", "3"])
        self.assertEqual(code, 0)
        with rasterio.open(os.path.join(self.tmpdir, "out.tif")) as src:
            data = src.read(1).astype(np.float64)
            tags = src.tags()
        np.testing.assert_array_equal(data, expected_or(self.a, self.b, NODATA, NODATA))
        self.assertEqual(tags["metadata_1"], "Created by raster_logic's Or tool")
        self.assertTrue(tags["metadata_2"].startswith("Elapsed Time (excluding I/O):"))

    def test_not_needs_one_input(self):
        out_path = os.path.join(self.tmpdir, "not.tif")
        code = main(["--operation", "not", "-i1", os.path.join(self.tmpdir, "in1.tif"),
                     "-o", out_path, "-v"])
        self.assertEqual(code, 0)
        with rasterio.open(out_path) as src:
            data = src.read(1)
        expected = np.where(self.a == NODATA, NODATA, np.where(self.a == 0.0, 1.0, 0.0))
        np.testing.assert_array_equal(data, expected.astype(np.float32))

    def test_missing_second_input(self):
        out_path = os.path.join(self.tmpdir, "out.tif")
        code = main(["-i1", os.path.join(self.tmpdir, "in1.tif"), "-o", out_path])
        self.assertEqual(code, 1)
        self.assertFalse(os.path.exists(out_path))

    def test_shape_mismatch_writes_nothing(self):
        save_synthetic_raster(os.path.join(self.tmpdir, "small.tif"), np.zeros((3, 4)))
        out_path = os.path.join(self.tmpdir, "out.tif")
        code = main([f"--wd={self.tmpdir}", "--input1=in1.tif", "--input2=small.tif",
                     "-o=out.tif"])
        self.assertEqual(code, 1)
        self.assertFalse(os.path.exists(out_path))

    def test_missing_file(self):
        code = main([f"--wd={self.tmpdir}", "--input1=nope.tif", "--input2=in2.tif",
                     "-o=out.tif"])
        self.assertEqual(code, 1)

    def test_toolhelp(self):
        buf = io.StringIO()
        with contextlib.redirect_stdout(buf):
            code = main(["-r", "xor", "--toolhelp"])
        self.assertEqual(code, 0)
        self.assertIn("logical XOR", buf.getvalue())


if __name__ == '__main__':
    unittest.main()
