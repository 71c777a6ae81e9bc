"""Logging for the polycell package.

Every module logs through a child of the ``polycell`` logger obtained with
``get_logger``. The library itself only installs a ``NullHandler``; output
appears once an application (or the command line entry point) calls
``configure_logging``. The process root logger is never touched.
"""
from __future__ import annotations

import logging
import sys
from typing import IO, Optional, Union

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')
DEFAULT_FORMAT = '%(levelname)s %(name)s: %(message)s'

# third-party loggers that flood DEBUG output while plotting
_NOISY = ('matplotlib', 'matplotlib.font_manager', 'PIL')


class _PolycellHandler(logging.StreamHandler):
    """Stream handler installed by configure_logging; replaced on each call."""


def _to_level(level: Union[str, int]) -> int:
    if isinstance(level, int):
        return level
    name = str(level).upper()
    if name not in LOG_LEVELS:
        raise ValueError(f"unknown log level {level!r}; expected one of {LOG_LEVELS}")
    return getattr(logging, name)


def configure_logging(level: Union[str, int] = 'INFO', stream: Optional[IO[str]] = None,
                      fmt: str = DEFAULT_FORMAT, mute_external: bool = True) -> logging.Logger:
    """Send the ``polycell`` logger family to ``stream`` (stdout by default).

    Calling it again swaps the previously installed handler, so the last
    call wins. Handlers added by the application are left alone.
    """
    lvl = _to_level(level)
    pkg = logging.getLogger('polycell')
    for h in list(pkg.handlers):
        if isinstance(h, (_PolycellHandler, logging.NullHandler)):
            pkg.removeHandler(h)
    handler = _PolycellHandler(stream=stream if stream is not None else sys.stdout)
    handler.setFormatter(logging.Formatter(fmt))
    pkg.addHandler(handler)
    pkg.propagate = False
    pkg.setLevel(lvl)
    if mute_external and lvl <= logging.DEBUG:
        for noisy in _NOISY:
            logging.getLogger(noisy).setLevel(logging.INFO)
    return pkg


def get_logger(name: str, level: Optional[Union[str, int]] = None) -> logging.Logger:
    """Logger ``polycell.<name>``; without a level it inherits from ``polycell``."""
    if name != 'polycell' and not name.startswith('polycell.'):
        name = f'polycell.{name}'
    log = logging.getLogger(name)
    log.setLevel(_to_level(level) if level is not None else logging.NOTSET)
    return log


__all__ = ['LOG_LEVELS', 'get_logger', 'configure_logging']
