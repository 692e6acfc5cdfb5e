import os
import unittest
from unittest import mock

import numpy as np

from sdfterm import backend
from sdfterm.backend import CUDA_ENV, get_array_module, to_numpy


class ArrayModuleTests(unittest.TestCase):
    def test_numpy_by_default(self) -> None:
        with mock.patch.dict(os.environ, {CUDA_ENV: ""}):
            self.assertIs(get_array_module(), np)
        self.assertIs(get_array_module(False), np)

    def test_cuda_request_without_cupy_falls_back_to_numpy(self) -> None:
        with mock.patch.object(backend, "cp", None):
            with mock.patch.dict(os.environ, {CUDA_ENV: "1"}):
                self.assertIs(get_array_module(), np)
            self.assertIs(get_array_module(True), np)

    def test_cuda_request_uses_cupy_when_present(self) -> None:
        fake_cupy = mock.MagicMock()
        with mock.patch.object(backend, "cp", fake_cupy):
            with mock.patch.dict(os.environ, {CUDA_ENV: "yes"}):
                self.assertIs(get_array_module(), fake_cupy)
            with mock.patch.dict(os.environ, {CUDA_ENV: "1"}):
                self.assertIs(get_array_module(False), np)

    def test_to_numpy_passes_numpy_arrays_through(self) -> None:
        a = np.arange(6.0).reshape(2, 3)
        out = to_numpy(np, a)
        self.assertIsInstance(out, np.ndarray)
        np.testing.assert_array_equal(out, a)


if __name__ == "__main__":
    unittest.main()
