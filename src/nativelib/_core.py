# (c) 2025 Mario "Neo" Sieg. <mario.sieg.64@gmail.com>

import os
import sys
from dataclasses import dataclass, field
from enum import Enum, unique
from functools import lru_cache
from os import getenv
from pathlib import Path
from typing import Mapping, Optional

from nativelib.errors import UnsupportedPlatformError

WINDIR_VARIABLE: str = 'windir'
LINUX_OSTYPE_MARKER: str = 'proc/sys/kernel/ostype'
MACOS_VERSION_MARKER: str = 'System/Library/CoreServices/SystemVersion.plist'


@unique
class Platform(Enum):
    """Operating system family a native binary is built for."""

    WINDOWS = 'Windows'
    LINUX = 'Linux'
    MACOS = 'MacOs'

    def __str__(self) -> str:
        return self.value


@unique
class Bitness(Enum):
    """Address width of the running process."""

    X32 = 'x32'
    X64 = 'x64'

    def __str__(self) -> str:
        return self.value


def _env_flag(name: str, default: bool) -> bool:
    return getenv(name, '1' if default else '0') == '1'


def _env_path(name: str) -> Optional[Path]:
    value = getenv(name)
    return Path(value) if value else None


@dataclass
class Config:
    verbose: bool = field(default_factory=lambda: _env_flag('NATIVELIB_VERBOSE', False))
    target_dir: Optional[Path] = field(default_factory=lambda: _env_path('NATIVELIB_TARGET_DIR'))
    modify_search_path: bool = field(default_factory=lambda: _env_flag('NATIVELIB_MODIFY_SEARCH_PATH', True))
    load_explicit: bool = field(default_factory=lambda: _env_flag('NATIVELIB_LOAD_EXPLICIT', False))


@lru_cache(maxsize=1)
def current_bitness() -> Bitness:
    """Bitness of this interpreter process, not of the OS it runs on."""
    return Bitness.X64 if sys.maxsize > 2**32 else Bitness.X32


def detect_platform(*, environ: Mapping[str, str] | None = None, root: Path | str | None = None) -> Platform:
    """Determine the running OS family from environment and filesystem probes.

    Probes, first match wins:

    1. a ``windir`` environment value that looks like a Windows path and exists,
    2. ``/proc/sys/kernel/ostype`` starting with ``Linux`` (Android lands here too),
    3. ``/System/Library/CoreServices/SystemVersion.plist`` (iOS lands here too).

    ``environ`` and ``root`` replace ``os.environ`` and the filesystem root the
    marker files are looked up under.
    """
    if environ is None:
        environ = os.environ
    root = Path(root) if root is not None else Path(os.path.abspath(os.sep))

    windir = environ.get(WINDIR_VARIABLE)
    if windir and '\\' in windir and os.path.isdir(windir):
        return Platform.WINDOWS

    os_type: Optional[str] = None
    ostype_file = root / LINUX_OSTYPE_MARKER
    if ostype_file.is_file():
        try:
            os_type = ostype_file.read_text(encoding='utf-8', errors='replace').strip()
        except OSError:
            # Unreadable marker counts as absent.
            os_type = None
        if os_type and os_type.lower().startswith('linux'):
            return Platform.LINUX

    if (root / MACOS_VERSION_MARKER).is_file():
        return Platform.MACOS

    if os_type:
        raise UnsupportedPlatformError(f'Unsupported OS: {os_type}')
    raise UnsupportedPlatformError('Unsupported OS!')


def default_target_directory() -> Path:
    """Directory of the running ``__main__`` script, or the working directory if it has none."""
    main = sys.modules.get('__main__')
    main_file = getattr(main, '__file__', None)
    if main_file:
        return Path(main_file).resolve().parent
    return Path.cwd()
