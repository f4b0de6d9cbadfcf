# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import logging
import numpy as np
import sadeopt.common.typing as tp
from sadeopt.common import errors
from . import base
from . import variants
from .population import Population


logger = logging.getLogger(__name__)


class LogLine(tp.NamedTuple):
    """Single entry of the log of SelfAdaptiveDE

    gen is the generation number, fevals the number of function evaluations used so far
    in the call to evolve, best the best fitness currently in the population, F and CR the
    parameters which created the best individual so far, dx and df the population flatness,
    evaluated as the distance between the decision vectors (resp. fitness) of the best and
    worst individuals.
    """

    gen: int
    fevals: int
    best: float
    F: float
    CR: float
    dx: float
    df: float


class _SadeConfig(tp.NamedTuple):
    variant: int
    variant_adptv: int
    ftol: float
    xtol: float
    memory: bool


class _AdaptationState:
    """F and CR values of each individual, which persist across calls to evolve
    when memory is activated and the population size does not change.
    """

    def __init__(self) -> None:
        self.F = np.zeros(0)
        self.CR = np.zeros(0)

    def ensure(self, size: int, memory: bool, variant_adptv: int, random_state: np.random.RandomState) -> bool:
        """Reinitializes the values if required, and returns whether it did"""
        if memory and self.F.size == size and self.CR.size == size:
            return False
        self.F = np.zeros(size)
        self.CR = np.zeros(size)
        for i in range(size):
            if variant_adptv == 1:
                self.CR[i] = random_state.uniform()
                self.F[i] = random_state.uniform() * 0.9 + 0.1
            else:
                self.CR[i] = random_state.normal() * 0.15 + 0.5
                self.F[i] = random_state.normal() * 0.15 + 0.5
        return True


def _resolver(
    values: tp.Any, best: tp.Any, current: tp.Any, donors: np.ndarray
) -> tp.Callable[[variants.Reference], tp.Any]:
    """Maps the references of a recurrence to actual values (decision vectors or parameters)"""

    def resolve(ref: variants.Reference) -> tp.Any:
        if ref == variants.BEST:
            return best
        if ref == variants.SELF:
            return current
        return values[donors[ref]]

    return resolve


def _flatness(population: Population) -> tp.Tuple[int, float, float]:
    """Returns the index of the best individual and the distances between the
    best and the worst individuals in decision space and in fitness
    """
    best_idx = population.best_idx()
    worst_idx = population.worst_idx()
    x = population.get_x()
    f = population.get_f()
    dx = float(np.sum(np.abs(x[worst_idx] - x[best_idx])))
    df = float(abs(f[worst_idx][0] - f[best_idx][0]))
    return best_idx, dx, df


class SelfAdaptiveDE(base.Algorithm):
    """Self-adaptive Differential Evolution.

    Two variants of Differential Evolution where the F and CR parameters of each individual
    are adapted along the optimization:

    - jDE (:code:`variant_adptv=1`, Brest et al. 2006): each individual keeps its own F and CR
      with probability 0.9, otherwise they are redrawn uniformly (F in [0.1, 1), CR in [0, 1)).
    - iDE (:code:`variant_adptv=2`, Elsayed et al. 2011): F and CR are produced by applying the
      mutation recurrence of the selected variant to the F and CR values of the same donors,
      with normally distributed weights.

    In both cases the parameters of an individual are only updated when its trial vector is
    accepted. Components of a trial vector falling out of the bounds are redrawn uniformly
    within the bounds.

    Parameters
    ----------
    generations: int
        number of generations
    variant: int
        mutation variant, one of:
        1 - best/1/exp, 2 - rand/1/exp, 3 - rand-to-best/1/exp, 4 - best/2/exp, 5 - rand/2/exp,
        6 - best/1/bin, 7 - rand/1/bin, 8 - rand-to-best/1/bin, 9 - best/2/bin, 10 - rand/2/bin,
        11 - rand/3/exp, 12 - rand/3/bin, 13 - best/3/exp, 14 - best/3/bin,
        15 - rand-to-current/2/exp, 16 - rand-to-current/2/bin,
        17 - rand-to-best-and-current/2/exp, 18 - rand-to-best-and-current/2/bin
    variant_adptv: int
        F and CR adaptation scheme, 1 for jDE and 2 for iDE
    ftol: float
        stopping criterion on the fitness flatness of the population (checked every 40 generations)
    xtol: float
        stopping criterion on the decision vector flatness of the population (checked every 40 generations)
    memory: bool
        when True, the adapted F and CR are kept between successive calls to evolve
    seed: int or None
        seed of the internal random state (random if None)
    """

    min_population_size = 7
    name = "Self-adaptive Differential Evolution"

    # pylint: disable=too-many-arguments
    def __init__(
        self,
        generations: int = 1,
        variant: int = 2,
        variant_adptv: int = 1,
        ftol: float = 1e-6,
        xtol: float = 1e-6,
        memory: bool = False,
        seed: tp.Optional[int] = None,
    ) -> None:
        self._variant = variants.get_variant(variant)
        if isinstance(variant_adptv, bool) or variant_adptv not in (1, 2):
            raise errors.InvalidConfigurationError(
                f"The variant for self-adaptation must be in [1,2], while a value of {variant_adptv} was detected."
            )
        if not (ftol >= 0 and xtol >= 0):  # also rejects nan
            raise errors.InvalidConfigurationError(f"Tolerances must be positive, got ftol={ftol} and xtol={xtol}")
        super().__init__(generations=generations, seed=seed)
        self._config = _SadeConfig(int(variant), int(variant_adptv), float(ftol), float(xtol), bool(memory))
        self._state = _AdaptationState()

    @property
    def variant(self) -> int:
        return self._config.variant

    @property
    def variant_adptv(self) -> int:
        return self._config.variant_adptv

    @property
    def ftol(self) -> float:
        return self._config.ftol

    @property
    def xtol(self) -> float:
        return self._config.xtol

    @property
    def memory(self) -> bool:
        return self._config.memory

    def config(self) -> tp.Dict[str, tp.Any]:
        config = super().config()
        config.update(self._config._asdict())
        return config

    def get_extra_info(self) -> str:
        return (
            f"\tGenerations: {self.generations}\n\tVariant: {self.variant} ({self._variant.name})"
            f"\n\tSelf adaptation variant: {self.variant_adptv}\n\tStopping xtol: {self.xtol}"
            f"\n\tStopping ftol: {self.ftol}\n\tMemory: {self.memory}\n\tVerbosity: {self._verbosity}"
            f"\n\tSeed: {self._seed}"
        )

    def get_log(self) -> tp.List[LogLine]:
        """Log lines (gen, fevals, best, F, CR, dx, df) recorded during the last call to evolve,
        one every :code:`verbosity` generations (see :code:`set_verbosity`)
        """
        return list(self._log)

    def _jde_parameters(self, i: int) -> tp.Tuple[float, float]:
        rng = self._rng
        F = self._state.F[i] if rng.uniform() < 0.9 else rng.uniform() * 0.9 + 0.1
        CR = self._state.CR[i] if rng.uniform() < 0.9 else rng.uniform()
        return float(F), float(CR)

    def _ide_parameters(
        self, i: int, donors: np.ndarray, best_F: float, best_CR: float
    ) -> tp.Tuple[float, float]:
        recurrence = self._variant.recurrence
        values = []
        for params, best in [(self._state.F, best_F), (self._state.CR, best_CR)]:
            weights = [self._rng.normal() * 0.5 for _ in recurrence.terms]
            values.append(float(recurrence.combine(_resolver(params, best, params[i], donors), weights)))
        return values[0], values[1]

    # pylint: disable=too-many-locals,too-many-statements
    def _internal_evolve(self, population: Population) -> Population:
        problem = population.problem
        lower, upper = (np.asarray(b, dtype=float) for b in problem.get_bounds())
        size = len(population)
        fevals0 = problem.fevals  # discount for the already made fevals
        rng = self._rng
        recurrence = self._variant.recurrence
        count = 1  # regulates the header of the logs
        # decision vectors of the current (old) and next (new) generations
        popold = population.get_x()
        popnew = popold.copy()
        fit = population.get_f()
        # global best, and best at the end of the previous generation
        best_idx = population.best_idx()
        gbX = popnew[best_idx].copy()
        gbfit = fit[best_idx].copy()
        gbIter = gbX.copy()
        state = self._state
        state.ensure(size, self.memory, self.variant_adptv, rng)
        # initialization to the first individual, soon forgotten
        gbF, gbCR = float(state.F[0]), float(state.CR[0])
        gbIterF, gbIterCR = gbF, gbCR
        for gen in range(1, self.generations + 1):
            for i in range(size):
                donors = variants.select_donors(rng, size, recurrence.num_donors)
                if self.variant_adptv == 1:
                    F, CR = self._jde_parameters(i)
                else:
                    F, CR = self._ide_parameters(i, donors, gbIterF, gbIterCR)
                mutant = recurrence.combine(
                    _resolver(popold, gbIter, popold[i], donors), [F] * len(recurrence.terms)
                )
                trial = popold[i].copy()
                variants.Crossover(rng, self._variant.crossover, CR).apply(trial, mutant)
                variants.repair(rng, trial, lower, upper)
                newfitness = problem.fitness(trial)
                if newfitness[0] <= fit[i][0]:
                    fit[i] = newfitness
                    popnew[i] = trial
                    population.set_xf(i, trial, newfitness)
                    state.F[i] = F
                    state.CR[i] = CR
                    if newfitness[0] <= gbfit[0]:
                        gbfit = newfitness.copy()
                        gbX = trial.copy()
                        gbF, gbCR = F, CR
                else:
                    popnew[i] = popold[i]
            # end of the generation: champions become visible to the next one
            gbIter = gbX.copy()
            gbIterF, gbIterCR = gbF, gbCR
            popold, popnew = popnew, popold
            # exit conditions (every 40 generations)
            if not gen % 40:
                best_idx, dx, df = _flatness(population)
                if dx < self.xtol:
                    if self._verbosity:
                        logger.info("Exit condition -- xtol < %s", self.xtol)
                    return population
                if df < self.ftol:
                    if self._verbosity:
                        logger.info("Exit condition -- ftol < %s", self.ftol)
                    return population
            # logs (a line every verbosity generations)
            if self._verbosity and (gen % self._verbosity == 1 or self._verbosity == 1):
                best_idx, dx, df = _flatness(population)
                if count % 50 == 1:
                    logger.info(
                        "%7s%15s%15s%15s%15s%15s%15s", "Gen:", "Fevals:", "Best:", "F:", "CR:", "dx:", "df:"
                    )
                line = LogLine(
                    gen,
                    problem.fevals - fevals0,
                    float(population.get_f()[best_idx][0]),
                    gbIterF,
                    gbIterCR,
                    dx,
                    df,
                )
                logger.info("%7d%15d%15.6g%15.6g%15.6g%15.6g%15.6g", *line)
                self._record(line)
                count += 1
        if self._verbosity:
            logger.info("Exit condition -- generations = %s", self.generations)
        return population


jDE = base.ConfiguredAlgorithm(SelfAdaptiveDE, dict(variant_adptv=1)).set_name("jDE", register=True)
iDE = base.ConfiguredAlgorithm(SelfAdaptiveDE, dict(variant_adptv=2)).set_name("iDE", register=True)
MemoryJDE = base.ConfiguredAlgorithm(SelfAdaptiveDE, dict(variant_adptv=1, memory=True)).set_name(
    "MemoryJDE", register=True
)
MemoryIDE = base.ConfiguredAlgorithm(SelfAdaptiveDE, dict(variant_adptv=2, memory=True)).set_name(
    "MemoryIDE", register=True
)
