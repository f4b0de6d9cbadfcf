# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import copy
import numpy as np
import sadeopt.common.typing as tp
from sadeopt.common import errors
from sadeopt.functions.base import ProblemLike
from sadeopt.functions.base import get_name


class Population:
    """Individuals (decision vector and fitness pairs) of a problem, kept index-aligned.

    Parameters
    ----------
    problem: ProblemLike
        the problem the individuals belong to
    size: int
        number of individuals to draw uniformly at random within the bounds
        (each of them is evaluated once)
    seed: int or None
        seed of the random state used to draw the individuals

    Note
    ----
    Individuals can only be modified through :code:`set_xf` which replaces the decision vector
    and its fitness at once.
    """

    def __init__(self, problem: ProblemLike, size: int = 0, seed: tp.Optional[int] = None) -> None:
        if size < 0:
            raise errors.InvalidInputError(f"Population size cannot be negative, got {size}")
        self._problem = problem
        self.random_state = np.random.RandomState(seed)
        self._x: tp.List[np.ndarray] = []
        self._f: tp.List[np.ndarray] = []
        self._champion_x: tp.Optional[np.ndarray] = None
        self._champion_f: tp.Optional[np.ndarray] = None
        lower, upper = problem.get_bounds()
        for _ in range(size):
            self.push_back(self.random_state.uniform(lower, upper))

    @property
    def problem(self) -> ProblemLike:
        return self._problem

    def __len__(self) -> int:
        return len(self._x)

    def __repr__(self) -> str:
        return f"Population(problem={get_name(self._problem)}, size={len(self)})"

    def _check_x(self, x: tp.ArrayLike) -> np.ndarray:
        x = np.array(x, dtype=float, copy=True).ravel()
        if x.size != self._problem.dimension:
            raise errors.InvalidInputError(
                f"Decision vector has length {x.size} while the problem dimension is {self._problem.dimension}"
            )
        return x

    def _check_f(self, f: tp.ArrayLike) -> np.ndarray:
        f = np.array(f, dtype=float, copy=True).ravel()
        expected = self._problem.num_objectives + self._problem.num_constraints
        if f.size != expected:
            raise errors.InvalidInputError(f"Fitness has length {f.size} while {expected} values are expected")
        return f

    def _update_champion(self, x: np.ndarray, f: np.ndarray) -> None:
        if self._champion_f is None or f[0] < self._champion_f[0]:
            self._champion_x = x.copy()
            self._champion_f = f.copy()

    def push_back(self, x: tp.ArrayLike, f: tp.Optional[tp.ArrayLike] = None) -> None:
        """Appends an individual, evaluating it through the problem if no fitness is provided"""
        x = self._check_x(x)
        f = self._check_f(self._problem.fitness(x) if f is None else f)
        self._x.append(x)
        self._f.append(f)
        self._update_champion(x, f)

    def set_xf(self, index: int, x: tp.ArrayLike, f: tp.ArrayLike) -> None:
        """Replaces both the decision vector and the fitness of an individual"""
        if not 0 <= index < len(self):
            raise errors.InvalidInputError(f"Index {index} is out of range for a population of size {len(self)}")
        x = self._check_x(x)
        f = self._check_f(f)
        self._x[index] = x
        self._f[index] = f
        self._update_champion(x, f)

    def get_x(self) -> np.ndarray:
        """Decision vectors, as a (size, dimension) array"""
        return np.array(self._x, dtype=float).reshape(len(self), self._problem.dimension)

    def get_f(self) -> np.ndarray:
        """Fitness values, as a (size, num_values) array"""
        num = self._problem.num_objectives + self._problem.num_constraints
        return np.array(self._f, dtype=float).reshape(len(self), num)

    def best_idx(self) -> int:
        """Index of the individual with the lowest first objective (lowest index on ties)"""
        if not self._f:
            raise errors.InvalidInputError("Cannot find the best individual of an empty population")
        return int(np.argmin([f[0] for f in self._f]))

    def worst_idx(self) -> int:
        """Index of the individual with the highest first objective (lowest index on ties)"""
        if not self._f:
            raise errors.InvalidInputError("Cannot find the worst individual of an empty population")
        return int(np.argmax([f[0] for f in self._f]))

    @property
    def champion_x(self) -> np.ndarray:
        """Best decision vector ever inserted in the population"""
        if self._champion_x is None:
            raise errors.InvalidInputError("No champion in an empty population")
        return self._champion_x.copy()

    @property
    def champion_f(self) -> np.ndarray:
        """Fitness of the best decision vector ever inserted in the population"""
        if self._champion_f is None:
            raise errors.InvalidInputError("No champion in an empty population")
        return self._champion_f.copy()

    def copy(self) -> "Population":
        """Deep copy of the population, including its problem"""
        return copy.deepcopy(self)
