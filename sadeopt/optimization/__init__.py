# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

from .base import Algorithm  # abstract class, for type checking
from .base import ConfiguredAlgorithm
from .base import registry
from .population import Population
from .sade import SelfAdaptiveDE
from .sade import LogLine
from . import variants
from . import callbacks
