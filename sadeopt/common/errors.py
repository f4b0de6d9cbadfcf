# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.


# base classes


class SadeoptError(Exception):
    """Base class for error raised by sadeopt"""


class SadeoptWarning(Warning):
    pass


# errors
# pylint: disable=too-many-ancestors


class SadeoptValueError(ValueError, SadeoptError):
    """Value error raised by sadeopt"""


class SadeoptTypeError(TypeError, SadeoptError):
    """Type error raised by sadeopt"""


class SadeoptNotImplementedError(NotImplementedError, SadeoptError):
    """Not implemented functionality"""


class InvalidConfigurationError(SadeoptValueError):
    """The algorithm settings are not valid, the algorithm cannot be created"""


class InvalidProblemError(SadeoptValueError):
    """The problem is not compatible with the algorithm (constraints, objectives, noise)"""


class InvalidInputError(SadeoptValueError):
    """The population or the individual provided is not valid"""


# warnings


class SadeoptRuntimeWarning(RuntimeWarning, SadeoptWarning):
    """Runtime warning raised by sadeopt"""


class FailedLogDumpWarning(SadeoptRuntimeWarning):
    """Log lines could not be written to file"""
