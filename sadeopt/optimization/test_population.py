# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import pytest
import numpy as np
from sadeopt.common import errors
from sadeopt.functions import Problem
from sadeopt.functions import corefuncs
from .population import Population


def _sphere() -> Problem:
    return Problem(corefuncs.sphere, [-5, -5], [5, 5])


def test_random_population() -> None:
    problem = _sphere()
    pop = Population(problem, size=10, seed=12)
    assert len(pop) == 10
    assert problem.fevals == 10
    x = pop.get_x()
    f = pop.get_f()
    assert x.shape == (10, 2)
    assert f.shape == (10, 1)
    assert np.all(x >= -5) and np.all(x <= 5)
    np.testing.assert_array_almost_equal(f[:, 0], np.sum(x ** 2, axis=1))
    assert repr(pop) == "Population(problem=sphere, size=10)"


def test_seeded_population_is_reproducible() -> None:
    pop1 = Population(_sphere(), size=8, seed=3)
    pop2 = Population(_sphere(), size=8, seed=3)
    np.testing.assert_array_equal(pop1.get_x(), pop2.get_x())
    np.testing.assert_array_equal(pop1.get_f(), pop2.get_f())


def test_best_worst_and_ties() -> None:
    pop = Population(_sphere())
    for value in [3.0, 1.0, 4.0, 1.0, 4.0]:
        pop.push_back([value, 0.0], [value])
    assert pop.best_idx() == 1
    assert pop.worst_idx() == 2
    np.testing.assert_array_equal(pop.champion_x, [1.0, 0.0])
    np.testing.assert_array_equal(pop.champion_f, [1.0])


def test_set_xf() -> None:
    problem = _sphere()
    pop = Population(problem, size=3, seed=1)
    fevals = problem.fevals
    pop.set_xf(1, [0.0, 0.0], [0.0])
    assert problem.fevals == fevals  # no evaluation
    np.testing.assert_array_equal(pop.get_x()[1], [0.0, 0.0])
    np.testing.assert_array_equal(pop.get_f()[1], [0.0])
    assert pop.best_idx() == 1
    np.testing.assert_array_equal(pop.champion_f, [0.0])


def test_getters_return_copies() -> None:
    pop = Population(_sphere(), size=3, seed=1)
    x = pop.get_x()
    x[0, 0] = 12.0
    assert pop.get_x()[0, 0] != 12.0


def test_population_errors() -> None:
    pop = Population(_sphere(), size=2, seed=1)
    with pytest.raises(errors.InvalidInputError):
        pop.set_xf(2, [0.0, 0.0], [0.0])
    with pytest.raises(errors.InvalidInputError):
        pop.set_xf(0, [0.0, 0.0, 0.0], [0.0])
    with pytest.raises(errors.InvalidInputError):
        pop.push_back([0.0, 0.0], [0.0, 1.0])
    with pytest.raises(errors.InvalidInputError):
        Population(_sphere(), size=-1)
    empty = Population(_sphere())
    with pytest.raises(errors.InvalidInputError):
        empty.best_idx()
    with pytest.raises(errors.InvalidInputError):
        empty.champion_x  # pylint: disable=pointless-statement


def test_copy() -> None:
    pop = Population(_sphere(), size=4, seed=2)
    other = pop.copy()
    other.set_xf(0, [0.0, 0.0], [0.0])
    assert pop.get_x()[0].tolist() != [0.0, 0.0]
    assert other.problem is not pop.problem
    np.testing.assert_array_equal(other.get_x()[1:], pop.get_x()[1:])
