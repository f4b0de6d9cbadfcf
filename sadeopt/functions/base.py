# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import numbers
import numpy as np
import sadeopt.common.typing as tp
from sadeopt.common import errors


@tp.runtime_checkable
class ProblemLike(tp.Protocol):
    """Capabilities an algorithm relies upon to optimize a problem.
    Any object providing them can be optimized, no inheritance is required.
    A :code:`name` attribute is optional (see :code:`get_name`).
    """

    # pylint: disable=pointless-statement,unused-argument

    @property
    def dimension(self) -> int:
        ...

    @property
    def num_objectives(self) -> int:
        ...

    @property
    def num_constraints(self) -> int:
        ...

    @property
    def is_stochastic(self) -> bool:
        ...

    @property
    def fevals(self) -> int:
        ...

    def fitness(self, x: tp.ArrayLike) -> np.ndarray:
        ...

    def get_bounds(self) -> tp.Bounds:
        ...


def get_name(problem: tp.Any) -> str:
    """Name of a problem, defaulting to its class name when it has no name attribute"""
    return str(getattr(problem, "name", problem.__class__.__name__))


class Problem:
    """Box-bounded problem built from a python callable

    Parameters
    ----------
    function: callable
        the function to minimize, taking a 1d numpy array and returning a float
        (or a sequence of floats when the problem has several objectives)
    lower: array-like
        lower bounds of each variable
    upper: array-like
        upper bounds of each variable
    num_objectives: int
        number of values returned by the function
    num_constraints: int
        number of constraints included in the returned values
    stochastic: bool
        whether the function is noisy
    name: str or None
        name of the problem (defaults to the function name)

    Note
    ----
    Each call to :code:`fitness` increments the :code:`fevals` counter.
    """

    def __init__(
        self,
        function: tp.Callable[[np.ndarray], tp.Loss],
        lower: tp.ArrayLike,
        upper: tp.ArrayLike,
        *,
        num_objectives: int = 1,
        num_constraints: int = 0,
        stochastic: bool = False,
        name: tp.Optional[str] = None,
    ) -> None:
        if not callable(function):
            raise errors.SadeoptTypeError(f"Expected a callable but got {function!r}")
        lb, ub = (np.array(b, dtype=float, copy=True).ravel() for b in (lower, upper))
        if lb.size != ub.size:
            raise errors.SadeoptValueError(
                f"Lower and upper bounds must have the same length, got {lb.size} and {ub.size}"
            )
        if not lb.size:
            raise errors.SadeoptValueError("No variable to optimize: bounds are empty.")
        if not (np.all(np.isfinite(lb)) and np.all(np.isfinite(ub))):
            raise errors.SadeoptValueError("Bounds must be finite.")
        if np.any(lb > ub):
            idx = int(np.argmax(lb > ub))
            raise errors.SadeoptValueError(
                f"Lower bound {lb[idx]} is larger than upper bound {ub[idx]} for variable {idx}"
            )
        if num_objectives < 1:
            raise errors.SadeoptValueError(f"At least one objective is required, got {num_objectives}")
        if num_constraints < 0:
            raise errors.SadeoptValueError(f"Number of constraints cannot be negative, got {num_constraints}")
        self._function = function
        self._lower = lb
        self._upper = ub
        self._num_objectives = int(num_objectives)
        self._num_constraints = int(num_constraints)
        self._stochastic = bool(stochastic)
        if name is None:
            name = function.__name__ if hasattr(function, "__name__") else function.__class__.__name__
        self._name = name
        self._fevals = 0

    @property
    def name(self) -> str:
        return self._name

    @property
    def dimension(self) -> int:
        return self._lower.size

    @property
    def num_objectives(self) -> int:
        return self._num_objectives

    @property
    def num_constraints(self) -> int:
        return self._num_constraints

    @property
    def is_stochastic(self) -> bool:
        return self._stochastic

    @property
    def fevals(self) -> int:
        """Number of calls to the fitness method so far"""
        return self._fevals

    @property
    def function(self) -> tp.Callable[[np.ndarray], tp.Loss]:
        return self._function

    def get_bounds(self) -> tp.Bounds:
        return self._lower.copy(), self._upper.copy()

    def fitness(self, x: tp.ArrayLike) -> np.ndarray:
        """Evaluates the function and returns its output as a 1d array
        of length num_objectives + num_constraints
        """
        x = np.asarray(x, dtype=float)
        if x.shape != (self.dimension,):
            raise errors.SadeoptValueError(
                f"Expected a decision vector of shape ({self.dimension},) but got {x.shape}"
            )
        value = self._function(x)
        self._fevals += 1
        if isinstance(value, numbers.Number):
            value = [value]
        output = np.array(value, dtype=float).ravel()
        expected = self._num_objectives + self._num_constraints
        if output.size != expected:
            raise errors.SadeoptValueError(
                f"Function {self.name} returned {output.size} value(s) while {expected} were expected"
            )
        return output

    def __call__(self, x: tp.ArrayLike) -> np.ndarray:
        return self.fitness(x)

    def __repr__(self) -> str:
        return f"Problem({self.name}, dimension={self.dimension}, fevals={self.fevals})"
