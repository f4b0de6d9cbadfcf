# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import inspect
import typing as tp


def different_from_defaults(
    *,
    instance: tp.Any,
    instance_dict: tp.Optional[tp.Dict[str, tp.Any]] = None,
    check_mismatches: bool = False,
    cls: tp.Optional[type] = None,
) -> tp.Dict[str, tp.Any]:
    """Returns the public settings of an instance which differ from the defaults
    of its constructor, which is convenient for short reprs.

    Parameters
    ----------
    instance: object
        the object to inspect
    instance_dict: dict
        settings of the instance (defaults to its :code:`__dict__`)
    check_mismatches: bool
        raise a RuntimeError if the settings and the constructor arguments differ
    cls: type
        class holding the constructor (defaults to the class of the instance)
    """
    signature = inspect.signature((instance.__class__ if cls is None else cls).__init__)
    defaults = {
        name: param.default
        for name, param in signature.parameters.items()
        if param.kind not in (param.VAR_POSITIONAL, param.VAR_KEYWORD) and name != "self"
    }
    settings = instance.__dict__ if instance_dict is None else instance_dict
    if check_mismatches and set(defaults) != set(settings):
        raise RuntimeError(f"Settings {sorted(settings)} do not match arguments {sorted(defaults)}")
    return {
        name: settings[name]
        for name, default in defaults.items()
        if name in settings and not name.startswith("_") and settings[name] != default
    }
