# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

from .common import typing as typing
from .common import errors as errors
from .functions import Problem as Problem
from .functions import Translate as Translate
from .functions import corefuncs as corefuncs
from .optimization import Population as Population
from .optimization import SelfAdaptiveDE as SelfAdaptiveDE
from .optimization import registry as registry
from .optimization import callbacks as callbacks


__all__ = [
    "Problem",
    "Translate",
    "Population",
    "SelfAdaptiveDE",
    "registry",
    "callbacks",
    "corefuncs",
    "errors",
    "typing",
]


__version__ = "0.1.0"
