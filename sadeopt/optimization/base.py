# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import numpy as np
import sadeopt.common.typing as tp
from sadeopt.common import tools as sotools
from sadeopt.common import errors as errors
from sadeopt.common.decorators import Registry
from sadeopt.functions.base import get_name
from .population import Population


registry: Registry["ConfiguredAlgorithm"] = Registry()
_GenerationCallBack = tp.Callable[["Algorithm", tp.Any], None]
X = tp.TypeVar("X", bound="Algorithm")


def random_seed() -> int:
    """Draws a seed from the operating system entropy source"""
    return int(np.random.SeedSequence().generate_state(1)[0])


class Algorithm:
    """Population based algorithm framework with one main function:

    - :code:`evolve(population)` which evolves the population inplace for a number of
      generations, and returns it.

    This class is abstract, :code:`_internal_evolve` has to be overridden. The common
    checks (problem suitability, population size) are performed by :code:`evolve` before
    any modification of the algorithm state, so that a rejected call leaves both the algorithm
    and the population untouched.

    Parameters
    ----------
    generations: int
        number of generations to run at each call to evolve (0 makes evolve a no-op)
    seed: int or None
        seed of the random state owned by the algorithm (drawn from the system entropy if None)
    """

    # algorithm qualifiers
    min_population_size = 1  # smallest population the algorithm can evolve
    name = "Algorithm"  # printed name in messages

    def __init__(self, generations: int = 1, seed: tp.Optional[int] = None) -> None:
        if generations < 0:
            raise errors.InvalidConfigurationError(f"Number of generations must be positive, got {generations}")
        self.generations = int(generations)
        self._seed = random_seed() if seed is None else int(seed)
        self._rng = np.random.RandomState(self._seed)
        self._verbosity = 0
        self._log: tp.List[tp.Any] = []
        self._callbacks: tp.Dict[str, tp.List[_GenerationCallBack]] = {}

    @property
    def random_state(self) -> np.random.RandomState:
        """np.random.RandomState: the random state the algorithm pulls from.
        It is reset by :code:`set_seed`.
        """
        return self._rng

    def set_seed(self, seed: int) -> None:
        """Sets the seed and reinitializes the random state with it"""
        self._seed = int(seed)
        self._rng = np.random.RandomState(self._seed)

    def get_seed(self) -> int:
        return self._seed

    def set_verbosity(self, level: int) -> None:
        """Sets the verbosity level of the logs

        Parameters
        ----------
        level: int
            0 for no log, otherwise a log line is recorded every :code:`level` generations
        """
        if level < 0:
            raise errors.SadeoptValueError(f"Verbosity level must be positive, got {level}")
        self._verbosity = int(level)

    def get_verbosity(self) -> int:
        return self._verbosity

    def get_log(self) -> tp.List[tp.Any]:
        """Log lines recorded during the last call to evolve"""
        return list(self._log)

    def register_callback(self, name: str, callback: _GenerationCallBack) -> None:
        """Add a callback method called each time a log line is recorded during evolve,
        with the algorithm and the log line as arguments. This can be useful for custom logging.

        Parameters
        ----------
        name: str
            name of the event to register the callback for (only :code:`generation` is available)
        callback: callable
            a callable taking the algorithm and the log line as arguments
        """
        if name != "generation":
            raise errors.SadeoptValueError(f'Only "generation" events can have callbacks (not {name})')
        self._callbacks.setdefault(name, []).append(callback)

    def remove_all_callbacks(self) -> None:
        """Removes all registered callables"""
        self._callbacks = {}

    def _record(self, line: tp.Any) -> None:
        self._log.append(line)
        for callback in self._callbacks.get("generation", []):
            callback(self, line)

    def _check_problem(self, population: Population) -> None:
        problem = population.problem
        name = get_name(problem)
        if problem.num_constraints != 0:
            raise errors.InvalidProblemError(
                f"Non linear constraints detected in {name} instance. {self.name} cannot deal with them"
            )
        if problem.num_objectives != 1:
            raise errors.InvalidProblemError(
                f"Multiple objectives detected in {name} instance. {self.name} cannot deal with them"
            )
        if problem.is_stochastic:
            raise errors.InvalidProblemError(
                f"The problem {name} appears to be stochastic, {self.name} cannot deal with it"
            )

    def evolve(self, population: Population) -> Population:
        """Evolves the population for the configured number of generations (or until
        an algorithm specific stopping criterion is met)

        Parameters
        ----------
        population: Population
            population to evolve, it is modified inplace

        Returns
        -------
        Population
            the evolved population
        """
        self._check_problem(population)
        if not self.generations:
            return population
        if len(population) < self.min_population_size:
            raise errors.InvalidInputError(
                f"{self.name} needs at least {self.min_population_size} individuals in the population, "
                f"{len(population)} detected"
            )
        # no throws, all valid: we clear the logs
        self._log = []
        return self._internal_evolve(population)

    def _internal_evolve(self, population: Population) -> Population:
        raise errors.SadeoptNotImplementedError("Algorithm subclasses must implement _internal_evolve")

    def config(self) -> tp.Dict[str, tp.Any]:
        return {"generations": self.generations, "seed": self._seed}

    def __repr__(self) -> str:
        diff = sotools.different_from_defaults(instance=self, instance_dict=self.config())
        params = ", ".join(f"{x}={y!r}" for x, y in sorted(diff.items()) if x != "seed")
        return f"{self.__class__.__name__}({params})"


class ConfiguredAlgorithm:
    """Creates algorithm-like instances with configuration.

    Parameters
    ----------
    AlgorithmClass: type
        class of the algorithm to configure
    config: dict
        dictionnary of all the configurations, except the number of generations and the seed

    Note
    ----
    This provides a default repr which can be bypassed through set_name
    """

    def __init__(self, AlgorithmClass: tp.Type[Algorithm], config: tp.Dict[str, tp.Any]) -> None:
        self._AlgorithmClass = AlgorithmClass
        self._config = dict(config)
        diff = sotools.different_from_defaults(instance=self, instance_dict=self._config, cls=AlgorithmClass)
        params = ", ".join(f"{x}={y!r}" for x, y in sorted(diff.items()))
        self.name = f"{AlgorithmClass.__name__}({params})"
        # try instantiating for init checks
        self(generations=0, seed=0)

    def config(self) -> tp.Dict[str, tp.Any]:
        return dict(self._config)

    def __call__(self, generations: int = 1, seed: tp.Optional[int] = None) -> Algorithm:
        """Creates an algorithm from the configuration

        Parameters
        ----------
        generations: int
            number of generations to run at each call to evolve
        seed: int or None
            seed of the random state of the algorithm
        """
        algorithm = self._AlgorithmClass(generations=generations, seed=seed, **self._config)  # type: ignore
        # hacky but convenient to have around:
        algorithm._configured_algorithm = self  # type: ignore
        return algorithm

    def __repr__(self) -> str:
        return self.name

    def set_name(self, name: str, register: bool = False) -> "ConfiguredAlgorithm":
        """Set a new representation for the instance"""
        self.name = name
        if register:
            registry.register_name(name, self)
        return self

    def __eq__(self, other: tp.Any) -> tp.Any:
        if self.__class__ == other.__class__:
            if self._AlgorithmClass == other._AlgorithmClass and self._config == other._config:
                return True
        return False
