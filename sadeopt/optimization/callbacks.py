# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""Callbacks to register on an algorithm through :code:`algorithm.register_callback("generation", callback)`.
They are called with the algorithm and the log line each time a line is recorded.
"""

import json
import logging
import datetime
import warnings
from pathlib import Path
import sadeopt.common.typing as tp
from sadeopt.common import errors
from . import base


global_logger = logging.getLogger(__name__)


class GenerationLogger:
    """Forwards the log lines to a logger

    Parameters
    ----------
    logger:
        the logger to write to (defaults to this module logger)
    log_level:
        level of the records
    """

    def __init__(self, *, logger: logging.Logger = global_logger, log_level: int = logging.INFO) -> None:
        self._logger = logger
        self._log_level = log_level

    def __call__(self, algorithm: base.Algorithm, line: tp.Any) -> None:
        self._logger.log(self._log_level, "%s: %s", algorithm.name, line)


class LogLinesDumper:
    """Writes each log line as a json line in a file, along with the algorithm
    representation, its seed and a session timestamp identifying the dumper instance.

    Parameters
    ----------
    filepath: str or pathlib.Path
        the file to write to (parent directories are created if need be)
    append: bool
        if False, a preexisting file is removed

    Example
    -------

    .. code-block:: python

        dumper = LogLinesDumper("logs/sade.json")
        algo.register_callback("generation", dumper)
        algo.evolve(pop)
        lines = dumper.load()  # list of dicts
    """

    def __init__(self, filepath: tp.Union[str, Path], append: bool = True) -> None:
        self._filepath = Path(filepath)
        self._session = datetime.datetime.now().strftime("%y-%m-%d %H:%M:%S")
        if not append and self._filepath.exists():
            self._filepath.unlink()
        self._filepath.parent.mkdir(parents=True, exist_ok=True)

    @property
    def filepath(self) -> Path:
        return self._filepath

    def __call__(self, algorithm: base.Algorithm, line: tp.Any) -> None:
        fields = line._asdict() if hasattr(line, "_asdict") else {"line": line}
        data = {"#algorithm": repr(algorithm), "#session": self._session, "#seed": algorithm.get_seed(), **fields}
        try:
            text = json.dumps(data)
        except (TypeError, ValueError) as e:
            warnings.warn(f"Could not serialize log line {line!r}: {e}", errors.FailedLogDumpWarning)
            return
        try:
            with self._filepath.open("a") as f:
                f.write(text + "\n")
        except OSError as e:
            warnings.warn(f"Could not write to {self._filepath}: {e}", errors.FailedLogDumpWarning)

    def load(self) -> tp.List[tp.Dict[str, tp.Any]]:
        """Reads back all the lines of the file (an empty list if it does not exist)"""
        if not self._filepath.exists():
            return []
        with self._filepath.open("r") as f:
            return [json.loads(text) for text in f if text.strip()]
