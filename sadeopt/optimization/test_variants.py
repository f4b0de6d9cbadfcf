# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import typing as tp
import pytest
import numpy as np
from sadeopt.common import errors
from sadeopt.common import testing
from . import variants


def test_variant_numbering() -> None:
    assert len(variants.VARIANTS) == 18
    names = [variants.VARIANTS[k].name for k in range(1, 19)]
    expected = [
        "best/1/exp", "rand/1/exp", "rand-to-best/1/exp", "best/2/exp", "rand/2/exp",
        "best/1/bin", "rand/1/bin", "rand-to-best/1/bin", "best/2/bin", "rand/2/bin",
        "rand/3/exp", "rand/3/bin", "best/3/exp", "best/3/bin",
        "rand-to-current/2/exp", "rand-to-current/2/bin",
        "rand-to-best-and-current/2/exp", "rand-to-best-and-current/2/bin",
    ]  # fmt: skip
    testing.printed_assert_equal(names, expected)
    assert variants.registry["rand/1/exp"].number == 2
    assert variants.registry.get_info("best/3/bin") == {"number": 14}


@testing.parametrized(zero=(0,), nineteen=(19,), negative=(-1,), boolean=(True,))
def test_get_variant_errors(number: int) -> None:
    with pytest.raises(errors.InvalidConfigurationError, match="must be in"):
        variants.get_variant(number)


@testing.parametrized(
    best_1=(variants.BEST_1, 5),
    rand_2=(variants.RAND_2, 5),
    rand_3=(variants.RAND_3, 7),
    best_3=(variants.BEST_3, 7),
    rand_to_best_and_current=(variants.RAND_TO_BEST_AND_CURRENT_2, 5),
)
def test_num_donors(recurrence: variants.Recurrence, expected: int) -> None:
    assert recurrence.num_donors == expected


# donors are the individuals 10 * k, best is -1 and current is 0.5
_VALUES = {variants.BEST: -1.0, variants.SELF: 0.5}


def _resolve(ref: variants.Reference) -> float:
    return _VALUES[ref] if isinstance(ref, str) else 10.0 * ref


@testing.parametrized(
    best_1=(variants.BEST_1, -1 + 2 * (10 - 20)),
    rand_1=(variants.RAND_1, 0 + 2 * (10 - 20)),
    rand_to_best_1=(variants.RAND_TO_BEST_1, 0.5 + 2 * (-1 - 0.5) + 2 * (0 - 10)),
    best_2=(variants.BEST_2, -1 + 2 * (0 - 10) + 2 * (20 - 30)),
    rand_2=(variants.RAND_2, 40 + 2 * (0 - 10) + 2 * (20 - 30)),
    rand_3=(variants.RAND_3, 0 + 2 * (10 - 20) + 2 * (30 - 40) + 2 * (50 - 60)),
    best_3=(variants.BEST_3, -1 + 2 * (10 - 20) + 2 * (30 - 40) + 2 * (50 - 60)),
    rand_to_current_2=(variants.RAND_TO_CURRENT_2, 0 + 2 * (10 - 0.5) + 2 * (20 - 30)),
    rand_to_best_and_current_2=(variants.RAND_TO_BEST_AND_CURRENT_2, 0 + 2 * (10 - 0.5) - 2 * (20 + 1)),
)
def test_recurrence_combine(recurrence: variants.Recurrence, expected: float) -> None:
    output = recurrence.combine(_resolve, [2.0] * len(recurrence.terms))
    np.testing.assert_almost_equal(output, expected)


def test_recurrence_combine_vectors() -> None:
    rows = np.arange(21, dtype=float).reshape(7, 3)
    best = np.array([100.0, 200.0, 300.0])

    def resolve(ref: variants.Reference) -> np.ndarray:
        return best if ref == variants.BEST else rows[ref]  # type: ignore

    output = variants.BEST_1.combine(resolve, [0.5])
    np.testing.assert_array_equal(output, best + 0.5 * (rows[1] - rows[2]))
    np.testing.assert_array_equal(rows[0], [0, 1, 2])  # inputs are not modified


def test_select_donors() -> None:
    rng = np.random.RandomState(12)
    for _ in range(50):
        donors = variants.select_donors(rng, 9, 7)
        assert len(set(donors.tolist())) == 7
        assert all(0 <= d < 9 for d in donors)
    donors = variants.select_donors(rng, 7, 7)
    assert sorted(donors.tolist()) == list(range(7))
    with pytest.raises(errors.InvalidInputError):
        variants.select_donors(rng, 4, 5)


def test_select_donors_is_uniform() -> None:
    rng = np.random.RandomState(0)
    counts = np.zeros(10)
    for _ in range(2000):
        counts[variants.select_donors(rng, 10, 5)] += 1
    np.testing.assert_array_less(np.abs(counts / 2000 - 0.5), 0.05)


@testing.parametrized(
    exp_zero=("exponential", 0.0),
    exp_half=("exponential", 0.5),
    exp_one=("exponential", 1.0),
    bin_zero=("binomial", 0.0),
    bin_half=("binomial", 0.5),
    bin_one=("binomial", 1.0),
)
def test_crossover_changes_at_least_one(kind: str, CR: float) -> None:
    rng = np.random.RandomState(12)
    for _ in range(20):
        trial = np.zeros(6)
        variants.Crossover(rng, kind, CR).apply(trial, np.ones(6))
        num = int(trial.sum())
        assert 1 <= num <= 6
        if CR == 0:
            assert num == 1
        if CR == 1:
            assert num == 6


def test_exponential_crossover_is_contiguous() -> None:
    rng = np.random.RandomState(3)
    for _ in range(20):
        trial = np.zeros(8)
        variants.Crossover(rng, "exponential", 0.7).apply(trial, np.ones(8))
        # copied components form a single block, modulo the dimension
        changes = np.sum(trial != np.roll(trial, 1))
        assert changes in (0, 2)


def test_crossover_unknown() -> None:
    with pytest.raises(ValueError):
        variants.Crossover(np.random.RandomState(0), "twopoints", 0.5)


@testing.parametrized(
    inside=([0.5, -0.5], [False, False]),
    below=([-2.0, 0.5], [True, False]),
    above=([0.0, 3.0], [False, True]),
    both=([-7.0, 3.0], [True, True]),
)
def test_repair(x: tp.List[float], redrawn: tp.List[bool]) -> None:
    lower, upper = np.array([-1.0, -1.0]), np.array([1.0, 1.0])
    data = np.array(x)
    variants.repair(np.random.RandomState(12), data, lower, upper)
    assert np.all(data >= lower) and np.all(data <= upper)
    for k, red in enumerate(redrawn):
        if not red:
            assert data[k] == x[k]
