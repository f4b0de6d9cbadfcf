# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import typing as tp
import numpy as np
from sadeopt.common import testing
from . import corefuncs


@testing.parametrized(**{name: (func,) for name, func in corefuncs.registry.items()})
def test_output_is_deterministic_float(func: tp.Callable[[np.ndarray], float]) -> None:
    x = np.random.RandomState(12).normal(0, 1, 17)
    x_copy = x.copy()
    outputs = [func(x) for _ in range(2)]
    assert isinstance(outputs[0], float)
    assert outputs[0] == outputs[1]
    np.testing.assert_array_equal(x, x_copy)  # inputs are not modified


@testing.parametrized(
    sphere=(corefuncs.sphere, [1, 2, 3, 4], 30),
    sphere1=(corefuncs.sphere1, [1, 2, 3, 4], 14),
    sphere2=(corefuncs.sphere2, [1, 2, 3, 4], 6),
    sphere4=(corefuncs.sphere4, [1, 2, 3, 4], 14),
    cigar=(corefuncs.cigar, [1, 2, 3, 4], 29000001),
    ellipsoid=(corefuncs.ellipsoid, [1, 1, 1], 1001001),
    rastrigin_ones=(corefuncs.rastrigin, [1, 1], 2),
    rastrigin_half=(corefuncs.rastrigin, [0.5], 20.25),
    rosenbrock=(corefuncs.rosenbrock, [1, 2, 3, 4], 2705),
    rosenbrock_zeros=(corefuncs.rosenbrock, [0, 0], 1),
    ackley=(corefuncs.ackley, [1, 1], 20 * (1 - np.exp(-0.2))),
    schwefel_1_2=(corefuncs.schwefel_1_2, [1, 2, 3, 4], 146),
    schwefel_zeros=(corefuncs.schwefel, [0, 0, 0], 3 * 418.9828872724339),
    griewank=(corefuncs.griewank, [2 * np.pi], np.pi ** 2 / 1000),
)
def test_values(func: tp.Callable[[np.ndarray], float], x: tp.List[float], expected: float) -> None:
    np.testing.assert_almost_equal(func(np.array(x, dtype=float)), expected, decimal=6)


@testing.parametrized(**{name: (name,) for name in corefuncs.registry})
def test_optimum(name: str) -> None:
    func = corefuncs.registry[name]
    optimum = np.full(5, corefuncs.registry.get_info(name)["optimum"])
    np.testing.assert_almost_equal(func(optimum), 0.0, decimal=4)
    for direction in np.eye(5):
        assert func(optimum + 0.01 * direction) > func(optimum)
