# (c) 2025 Mario "Neo" Sieg. <mario.sieg.64@gmail.com>

import logging
import os
import sys
from pathlib import Path
from typing import MutableMapping

from nativelib._core import Platform
from nativelib._logging import null_logger

SEARCH_PATH_VARIABLES: dict[Platform, str] = {
    Platform.WINDOWS: 'PATH',
    Platform.LINUX: 'LD_LIBRARY_PATH',
    Platform.MACOS: 'DYLD_LIBRARY_PATH',
}

_PATH_SEPARATORS: dict[Platform, str] = {
    Platform.WINDOWS: ';',
    Platform.LINUX: ':',
    Platform.MACOS: ':',
}

# Cookies from os.add_dll_directory; the directory is dropped again once one is closed.
_dll_directory_cookies: list[object] = []


def _register_dll_directories(dirs: list[str], logger: logging.Logger) -> None:
    # Python 3.8+ no longer resolves dependent DLLs through PATH.
    if sys.platform != 'win32' or not hasattr(os, 'add_dll_directory'):
        return
    for d in dirs:
        try:
            _dll_directory_cookies.append(os.add_dll_directory(d))
        except OSError as e:
            logger.warning(f'add_dll_directory({d}) failed: {e}')


def add_directories(
    platform: Platform,
    *dirs: Path | str,
    environ: MutableMapping[str, str] | None = None,
    logger: logging.Logger | None = None,
) -> bool:
    """Appends ``dirs`` to the native library search path variable of ``platform``.

    Directories already listed (compared as raw strings) are not added again.
    The value is split and joined with the platform's own list separator,
    ``;`` on Windows and ``:`` elsewhere, so the dynamic linker can parse it
    and a second call sees the entries the first one wrote.

    :param environ: Environment to mutate, ``os.environ`` by default.
    :returns: ``True`` if the variable was rewritten.
    """
    if logger is None:
        logger = null_logger()
    var_name = SEARCH_PATH_VARIABLES.get(platform)
    if not dirs or var_name is None:
        return False
    real_environ = environ is None
    if environ is None:
        environ = os.environ

    sep = _PATH_SEPARATORS[platform]
    parts = [p for p in environ.get(var_name, '').split(sep) if p]
    filtered: list[str] = []
    for d in map(str, dirs):
        if d not in parts and d not in filtered:
            filtered.append(d)
    if not filtered:
        return False

    environ[var_name] = sep.join(parts + filtered)
    logger.info(f'Added {sep.join(filtered)} to {var_name}')
    if real_environ and platform is Platform.WINDOWS:
        _register_dll_directories(filtered, logger)
    return True
