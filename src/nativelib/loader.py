# (c) 2025 Mario "Neo" Sieg. <mario.sieg.64@gmail.com>

import logging
import threading
import typing
from pathlib import Path

from nativelib._bootstrap import LOAD_LIBRARY_SEARCH_FLAGS, ffi, load_kernel32
from nativelib._core import Platform
from nativelib._logging import null_logger
from nativelib.errors import LoadError


@typing.final
class NativeLoader:
    """Maps extracted libraries into the process with the OS's own loader.

    One strategy per :class:`Platform`:

    * Windows: ``LoadLibraryExW`` with the application, default, DLL-load,
      System32 and user directories searched, so co-located dependencies win.
    * Linux: ``dlopen`` with ``RTLD_LAZY | RTLD_GLOBAL`` so the symbols are
      visible to libraries loaded afterwards.
    * macOS: nothing. Later foreign-function binding only finds the library
      through the dynamic linker search path, so an explicit load would not help.

    Handles are kept for the lifetime of the loader; nothing is ever unloaded.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger if logger is not None else null_logger()
        self._handles: list[tuple[Path, object]] = []
        self._lock = threading.Lock()
        self._strategies: dict[Platform, typing.Callable[[Path], object | None]] = {
            Platform.WINDOWS: self._load_windows,
            Platform.LINUX: self._load_linux,
            Platform.MACOS: self._load_macos,
        }

    @property
    def handles(self) -> tuple[tuple[Path, object], ...]:
        """``(path, handle)`` pairs of every library loaded so far."""
        with self._lock:
            return tuple(self._handles)

    def load_explicit(self, path: Path | str, platform: Platform) -> None:
        """Loads ``path`` using the strategy for ``platform``.

        :raises LoadError: If the OS reports failure.
        """
        path = Path(path)
        handle = self._strategies[platform](path)
        if handle is not None:
            with self._lock:
                self._handles.append((path, handle))

    def _load_windows(self, path: Path) -> object:
        self._logger.info(f'Directly loading {path}...')
        kernel32 = load_kernel32()
        handle = kernel32.LoadLibraryExW(str(path), ffi.NULL, LOAD_LIBRARY_SEARCH_FLAGS)
        if handle == ffi.NULL:
            code = ffi.getwinerror()[0]
            self._logger.error(f'LoadLibraryEx failed to load {path} (error {code})')
            raise LoadError(f'LoadLibraryEx failed to load {path} (error {code})', path, Platform.WINDOWS)
        self._logger.info(f'Loaded {path}')
        return handle

    def _load_linux(self, path: Path) -> object:
        self._logger.info(f'Linux dlopen of {path}')
        try:
            return ffi.dlopen(str(path), ffi.RTLD_LAZY | ffi.RTLD_GLOBAL)
        except OSError as e:
            self._logger.error(f'Linux dlopen failed to load {path}: {e}')
            raise LoadError(f'dlopen failed to load {path}: {e}', path, Platform.LINUX) from e

    def _load_macos(self, path: Path) -> None:
        self._logger.warning(
            f'Explicit loading of {path} is skipped on MacOs: symbols can only be bound '
            'once the library directory is on the dynamic linker search path'
        )
        return None
