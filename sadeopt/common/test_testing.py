# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import typing as tp
import pytest
from . import testing


@testing.parametrized(
    equal=([2, 3, 1], []),
    missing=((1, 2), ["  - missing element(s): [3]."]),
    additional=((1, 4, 3, 2), ["  - additional element(s): [4]."]),
    both=((1, 2, 4), ["  - additional element(s): [4].", "  - missing element(s): [3]."]),
)
def test_assert_set_equal(estimate: tp.Iterable[int], expected: tp.List[str]) -> None:
    if not expected:
        testing.assert_set_equal(estimate, {1, 2, 3})
        return
    with pytest.raises(AssertionError) as error:
        testing.assert_set_equal(estimate, {1, 2, 3})
    assert str(error.value).split("\n")[1:] == expected


def test_assert_set_equal_message() -> None:
    with pytest.raises(AssertionError, match="Sets are not equal:\nprefix"):
        testing.assert_set_equal([1], [2], err_msg="prefix")


def test_printed_assert_equal(capsys: tp.Any) -> None:
    testing.printed_assert_equal([1, 2], [1, 2])
    with pytest.raises(AssertionError):
        testing.printed_assert_equal([1, 2], [1, 3])
    assert "but got:  [1, 2]" in capsys.readouterr().out


@testing.parametrized(three=(3,), twelve=(12,))
def test_parametrized_single_argument(value: int) -> None:
    assert value in (3, 12)


def test_parametrized_errors() -> None:
    with pytest.raises(AssertionError):
        testing.parametrized(a=(1,), b=(1, 2))
    with pytest.raises(AssertionError):

        @testing.parametrized(a=(1, 2))
        def _single(x: int) -> None:
            pass
