# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""Deterministic continuous test functions, taking a 1d array and returning a float.

Each of them is registered with the coordinate of its global minimum (identical on all axes,
the minimum value being 0), so that they can be wrapped into a :code:`Problem` with bounds
containing the optimum.
"""

import numpy as np
import sadeopt.common.typing as tp
from sadeopt.common.decorators import Registry


registry: Registry[tp.Callable[[np.ndarray], float]] = Registry()


@registry.register_with_info(optimum=0.0)
def sphere(x: np.ndarray) -> float:
    """Sum of squares, if this one is not solved there is a bug somewhere."""
    return float(np.sum(np.square(x)))


@registry.register_with_info(optimum=1.0)
def sphere1(x: np.ndarray) -> float:
    return sphere(np.asarray(x) - 1.0)


@registry.register_with_info(optimum=2.0)
def sphere2(x: np.ndarray) -> float:
    return sphere(np.asarray(x) - 2.0)


@registry.register_with_info(optimum=4.0)
def sphere4(x: np.ndarray) -> float:
    return sphere(np.asarray(x) - 4.0)


@registry.register_with_info(optimum=0.0)
def cigar(x: np.ndarray) -> float:
    """Ill-conditioned: all axes but the first are scaled by 1e6."""
    return float(x[0] ** 2 + 1e6 * np.sum(np.square(x[1:])))


@registry.register_with_info(optimum=0.0)
def ellipsoid(x: np.ndarray) -> float:
    """Ill-conditioned: axis weights grow geometrically from 1 to 1e6."""
    weights = np.logspace(0, 6, num=len(x))
    return float(np.sum(weights * np.square(x)))


@registry.register_with_info(optimum=0.0)
def rastrigin(x: np.ndarray) -> float:
    """Highly multimodal, with a regular grid of local minima."""
    return float(10 * len(x) + np.sum(np.square(x) - 10 * np.cos(2 * np.pi * x)))


@registry.register_with_info(optimum=1.0)
def rosenbrock(x: np.ndarray) -> float:
    """Banana-shaped valley, unimodal in 2 and 3 dimensions."""
    head, tail = x[:-1], x[1:]
    return float(np.sum(100 * np.square(tail - head ** 2) + np.square(head - 1)))


@registry.register_with_info(optimum=0.0)
def ackley(x: np.ndarray) -> float:
    dim = len(x)
    rms = np.sqrt(np.sum(np.square(x)) / dim)
    mean_cos = np.sum(np.cos(2 * np.pi * x)) / dim
    return float(20 + np.e - 20 * np.exp(-0.2 * rms) - np.exp(mean_cos))


@registry.register_with_info(optimum=0.0)
def schwefel_1_2(x: np.ndarray) -> float:
    """Sum of the squared partial sums (rotated ellipsoid)."""
    return sphere(np.cumsum(x))


@registry.register_with_info(optimum=420.9687463)
def schwefel(x: np.ndarray) -> float:
    """Deceptive: the global minimum is far from the second best local minima.
    Usually optimized within [-500, 500].
    """
    return float(418.9828872724339 * len(x) - np.sum(x * np.sin(np.sqrt(np.abs(x)))))


@registry.register_with_info(optimum=0.0)
def griewank(x: np.ndarray) -> float:
    """Multimodal, with a product term coupling the variables."""
    scales = np.sqrt(np.arange(1, len(x) + 1))
    return float(1 + np.sum(np.square(x)) / 4000 - np.prod(np.cos(x / scales)))
