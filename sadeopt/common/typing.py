# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""Typing shortcuts shared by the package, import it as :code:`import sadeopt.common.typing as tp`
"""
# pylint: disable=unused-import
from typing import Any as Any
from typing import Callable as Callable
from typing import Dict as Dict
from typing import Hashable as Hashable
from typing import Iterable as Iterable
from typing import Iterator as Iterator
from typing import List as List
from typing import MutableMapping as MutableMapping
from typing import NamedTuple as NamedTuple
from typing import Optional as Optional
from typing import Sequence as Sequence
from typing import Tuple as Tuple
from typing import Type as Type
from typing import TypeVar as TypeVar
from typing import Union as Union
from typing_extensions import Protocol as Protocol
from typing_extensions import runtime_checkable as runtime_checkable
import numpy as _np


# decision vectors, as provided by users
ArrayLike = Union[Sequence[float], _np.ndarray]
# output of a user function: a float for single objective problems
Loss = Union[float, Sequence[float], _np.ndarray]
# (lower, upper) bounds of a box-bounded problem
Bounds = Tuple[_np.ndarray, _np.ndarray]
