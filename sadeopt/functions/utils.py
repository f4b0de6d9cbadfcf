# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import numpy as np
import sadeopt.common.typing as tp
from sadeopt.common import errors
from .base import ProblemLike
from .base import get_name


class Translate:
    """Shifts a problem by a translation vector: the optimum of the translated
    problem is located at the optimum of the original problem plus the translation,
    and so are the bounds.

    Parameters
    ----------
    problem: ProblemLike
        the problem to translate
    translation: array-like
        the translation vector, with one value per variable
    """

    def __init__(self, problem: ProblemLike, translation: tp.ArrayLike) -> None:
        self.translation = np.array(translation, dtype=float, copy=True).ravel()
        if self.translation.size != problem.dimension:
            raise errors.SadeoptValueError(
                f"Length of shift vector is: {self.translation.size} "
                f"while the problem dimension is: {problem.dimension}"
            )
        self._problem = problem

    @property
    def problem(self) -> ProblemLike:
        return self._problem

    @property
    def name(self) -> str:
        return f"{get_name(self._problem)} [translated]"

    @property
    def dimension(self) -> int:
        return self._problem.dimension

    @property
    def num_objectives(self) -> int:
        return self._problem.num_objectives

    @property
    def num_constraints(self) -> int:
        return self._problem.num_constraints

    @property
    def is_stochastic(self) -> bool:
        return self._problem.is_stochastic

    @property
    def fevals(self) -> int:
        return self._problem.fevals

    def get_bounds(self) -> tp.Bounds:
        lower, upper = self._problem.get_bounds()
        return np.asarray(lower) + self.translation, np.asarray(upper) + self.translation

    def fitness(self, x: tp.ArrayLike) -> np.ndarray:
        return self._problem.fitness(np.asarray(x, dtype=float) - self.translation)

    def __repr__(self) -> str:
        return f"Translate({self._problem!r}, translation={self.translation.tolist()})"
