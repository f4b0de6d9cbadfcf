# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""Mutation and crossover operators of self-adaptive differential evolution.

A mutation recurrence is described as data: a base reference plus a list of signed
difference terms. References are either a donor slot (an int, pointing to one of the
randomly selected individuals), :code:`BEST` (the generation champion) or :code:`SELF`
(the individual being evolved). The same description is used to combine decision vectors
(with weight F on every term) and, for iDE, the F and CR values of the referenced
individuals (with a random normal weight on every term).
"""

import numpy as np
import sadeopt.common.typing as tp
from sadeopt.common import errors
from sadeopt.common.decorators import Registry


BEST = "best"
SELF = "self"
Reference = tp.Union[int, str]
Resolver = tp.Callable[[Reference], tp.Any]
registry: Registry["Variant"] = Registry()


class Term(tp.NamedTuple):
    """Difference term :code:`sign * weight * (plus - minus)`"""

    plus: Reference
    minus: Reference
    sign: float = 1.0


class Recurrence(tp.NamedTuple):
    name: str
    base: Reference
    terms: tp.Tuple[Term, ...]

    @property
    def references(self) -> tp.Tuple[Reference, ...]:
        return (self.base,) + tuple(ref for term in self.terms for ref in (term.plus, term.minus))

    @property
    def num_donors(self) -> int:
        """Number of distinct individuals to draw from the population (5 or 7)"""
        slots = [ref for ref in self.references if isinstance(ref, int)]
        return 5 if max(slots, default=0) < 5 else 7

    def combine(self, resolve: Resolver, weights: tp.Sequence[float]) -> tp.Any:
        """Computes :code:`base + sum_k sign_k * weight_k * (plus_k - minus_k)`,
        resolve providing the value (vector or scalar) of each reference
        """
        assert len(weights) == len(self.terms), "One weight per difference term is required"
        output = resolve(self.base)
        for term, weight in zip(self.terms, weights):
            output = output + term.sign * weight * (resolve(term.plus) - resolve(term.minus))
        return output


BEST_1 = Recurrence("best/1", BEST, (Term(1, 2),))
RAND_1 = Recurrence("rand/1", 0, (Term(1, 2),))
RAND_TO_BEST_1 = Recurrence("rand-to-best/1", SELF, (Term(BEST, SELF), Term(0, 1)))
BEST_2 = Recurrence("best/2", BEST, (Term(0, 1), Term(2, 3)))
RAND_2 = Recurrence("rand/2", 4, (Term(0, 1), Term(2, 3)))
RAND_3 = Recurrence("rand/3", 0, (Term(1, 2), Term(3, 4), Term(5, 6)))
BEST_3 = Recurrence("best/3", BEST, (Term(1, 2), Term(3, 4), Term(5, 6)))
RAND_TO_CURRENT_2 = Recurrence("rand-to-current/2", 0, (Term(1, SELF), Term(2, 3)))
RAND_TO_BEST_AND_CURRENT_2 = Recurrence(
    "rand-to-best-and-current/2", 0, (Term(1, SELF), Term(2, BEST, sign=-1.0))
)


class Variant(tp.NamedTuple):
    number: int
    recurrence: Recurrence
    crossover: str  # "exponential" or "binomial"

    @property
    def name(self) -> str:
        return f"{self.recurrence.name}/{self.crossover[:3]}"


# numbering of the variants as exposed to the user
_NUMBERING = [
    (BEST_1, "exponential"),
    (RAND_1, "exponential"),
    (RAND_TO_BEST_1, "exponential"),
    (BEST_2, "exponential"),
    (RAND_2, "exponential"),
    (BEST_1, "binomial"),
    (RAND_1, "binomial"),
    (RAND_TO_BEST_1, "binomial"),
    (BEST_2, "binomial"),
    (RAND_2, "binomial"),
    (RAND_3, "exponential"),
    (RAND_3, "binomial"),
    (BEST_3, "exponential"),
    (BEST_3, "binomial"),
    (RAND_TO_CURRENT_2, "exponential"),
    (RAND_TO_CURRENT_2, "binomial"),
    (RAND_TO_BEST_AND_CURRENT_2, "exponential"),
    (RAND_TO_BEST_AND_CURRENT_2, "binomial"),
]
VARIANTS: tp.Dict[int, Variant] = {
    num: Variant(num, recurrence, crossover) for num, (recurrence, crossover) in enumerate(_NUMBERING, 1)
}
for _variant in VARIANTS.values():
    registry.register_name(_variant.name, _variant, info={"number": _variant.number})


def get_variant(number: int) -> Variant:
    if isinstance(number, bool) or number not in VARIANTS:
        raise errors.InvalidConfigurationError(
            "The Differential Evolution mutation variant must be in [1, .., 18], "
            f"while a value of {number} was detected."
        )
    return VARIANTS[number]


def select_donors(random_state: np.random.RandomState, size: int, count: int) -> np.ndarray:
    """Selects count distinct indices among range(size) using Durstenfeld's partial shuffle"""
    if count > size:
        raise errors.InvalidInputError(f"Cannot select {count} distinct individuals among {size}")
    indices = np.arange(size)
    selected = np.empty(count, dtype=int)
    for j in range(count):
        last = size - 1 - j
        k = random_state.randint(last + 1)
        selected[j] = indices[k]
        indices[k], indices[last] = indices[last], indices[k]
    return selected


class Crossover:
    """Copies components of a mutant vector into a trial vector

    Parameters
    ----------
    random_state: np.random.RandomState
        random state to draw from
    kind: str
        "exponential": consecutive components are copied (wrapping around) from a random start,
        as long as uniform draws stay below CR.
        "binomial": each component is copied if a uniform draw is below CR, and the last component
        visited is always copied.
    CR: float
        crossover probability
    """

    def __init__(self, random_state: np.random.RandomState, kind: str, CR: float) -> None:
        if kind not in ["exponential", "binomial"]:
            raise ValueError(f'Unknown crossover "{kind}"')
        self.random_state = random_state
        self.kind = kind
        self.CR = CR

    def apply(self, trial: np.ndarray, mutant: np.ndarray) -> None:
        """Modifies trial inplace (at least one component is always copied)"""
        if self.kind == "exponential":
            self.exponential(trial, mutant)
        else:
            self.binomial(trial, mutant)

    def exponential(self, trial: np.ndarray, mutant: np.ndarray) -> None:
        dim = trial.size
        n = self.random_state.randint(dim)
        copied = 0
        while True:
            trial[n] = mutant[n]
            n = (n + 1) % dim
            copied += 1
            if not (self.random_state.uniform() < self.CR and copied < dim):
                break

    def binomial(self, trial: np.ndarray, mutant: np.ndarray) -> None:
        dim = trial.size
        start = self.random_state.randint(dim)
        order = (start + np.arange(dim)) % dim
        selected = self.random_state.uniform(size=dim) < self.CR
        selected[-1] = True  # change at least one parameter
        trial[order[selected]] = mutant[order[selected]]


def repair(random_state: np.random.RandomState, x: np.ndarray, lower: np.ndarray, upper: np.ndarray) -> None:
    """Redraws uniformly within the bounds (inplace) each component which is out of bounds"""
    for j in np.flatnonzero((x < lower) | (x > upper)):
        x[j] = random_state.uniform(lower[j], upper[j])
