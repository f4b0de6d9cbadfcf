# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

from .base import ProblemLike
from .base import Problem
from .base import get_name
from .utils import Translate
from . import corefuncs
