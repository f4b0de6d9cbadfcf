# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""Helpers for the test modules of the package (they require pytest)"""

import inspect
import typing as tp
import numpy as np


def assert_set_equal(estimate: tp.Iterable[tp.Any], reference: tp.Iterable[tp.Any], err_msg: str = "") -> None:
    """Asserts that both iterables hold the same elements, listing
    the additional and missing ones otherwise
    """
    estimate, reference = set(estimate), set(reference)
    lines = [err_msg] if err_msg else []
    for name, elements in [("additional", estimate - reference), ("missing", reference - estimate)]:
        if elements:
            lines.append(f"  - {name} element(s): {sorted(elements, key=repr)}.")
    if len(lines) > bool(err_msg):
        raise AssertionError("\n".join(["Sets are not equal:"] + lines))


def printed_assert_equal(actual: tp.Any, desired: tp.Any, err_msg: str = "") -> None:
    """np.testing.assert_equal, printing both values on failure"""
    try:
        np.testing.assert_equal(actual, desired, err_msg=err_msg)
    except AssertionError:
        print(f"\nExpected: {desired}\nbut got:  {actual}")
        raise


class parametrized:
    """Named test cases for a test function, as in:

    .. code-block:: python

        @testing.parametrized(small=(2, 4), large=(12, 144))
        def test_square(value: int, expected: int) -> None:
            assert value ** 2 == expected

    The names are used as test ids, and each tuple provides a value
    for every argument of the test function, in order.
    """

    def __init__(self, **cases: tp.Tuple[tp.Any, ...]) -> None:
        assert cases, "At least one case is required"
        self.ids = sorted(cases)
        self.values = [tuple(cases[name]) for name in self.ids]
        self.num_args = len(self.values[0])
        assert all(len(v) == self.num_args for v in self.values), "All cases must have the same length"

    def __call__(self, func: tp.Callable[..., None]) -> tp.Any:
        import pytest  # pylint: disable=import-outside-toplevel

        names = list(inspect.signature(func).parameters)
        assert len(names) == self.num_args, f"Expected {self.num_args} arguments but got {names}"
        values = self.values if self.num_args > 1 else [v[0] for v in self.values]
        return pytest.mark.parametrize(",".join(names), values, ids=self.ids)(func)
