# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import typing as tp


X = tp.TypeVar("X")


class Registry(tp.MutableMapping[str, X]):
    """Name to object mapping, with optional information attached to each name.

    It is used to list the test functions, the mutation variants and the algorithm presets.
    Registering twice the same name raises a RuntimeError.

    Example
    -------

    .. code-block:: python

        functions: Registry[tp.Callable[[np.ndarray], float]] = Registry()

        @functions.register_with_info(multimodal=True)
        def rastrigin(x: np.ndarray) -> float:
            ...
    """

    def __init__(self) -> None:
        self._objects: tp.Dict[str, X] = {}
        self._info: tp.Dict[str, tp.Dict[tp.Hashable, tp.Any]] = {}

    def register_name(self, name: str, obj: X, info: tp.Optional[tp.Dict[tp.Hashable, tp.Any]] = None) -> None:
        if name in self._objects:
            raise RuntimeError(f'Name "{name}" is already registered')
        self._objects[name] = obj
        self._info[name] = {} if info is None else dict(info)

    def register(self, obj: X) -> X:
        """Decorator registering a function or class under its own name"""
        self.register_name(obj.__name__, obj)  # type: ignore
        return obj

    def register_with_info(self, **info: tp.Any) -> tp.Callable[[X], X]:
        """Decorator registering a function or class under its own name, with information"""

        def decorator(obj: X) -> X:
            self.register_name(obj.__name__, obj, info=info)  # type: ignore
            return obj

        return decorator

    def unregister(self, name: str) -> None:
        """Removes a name if it was registered (no-op otherwise)"""
        self._objects.pop(name, None)
        self._info.pop(name, None)

    def get_info(self, name: str) -> tp.Dict[tp.Hashable, tp.Any]:
        if name not in self._objects:
            raise ValueError(f'"{name}" is not registered.')
        return self._info.setdefault(name, {})

    def __getitem__(self, key: str) -> X:
        return self._objects[key]

    def __setitem__(self, key: str, value: X) -> None:
        self._objects[key] = value

    def __delitem__(self, key: str) -> None:
        del self._objects[key]
        self._info.pop(key, None)

    def __iter__(self) -> tp.Iterator[str]:
        return iter(self._objects)

    def __len__(self) -> int:
        return len(self._objects)

    def __repr__(self) -> str:
        return f"Registry({sorted(self._objects)})"
