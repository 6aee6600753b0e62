# (c) 2025 Mario "Neo" Sieg. <mario.sieg.64@gmail.com>

import logging
import threading
import typing
from enum import Enum, unique
from pathlib import Path

from nativelib._core import Bitness, Config, Platform, current_bitness, default_target_directory, detect_platform
from nativelib._logging import null_logger, verbose_logger
from nativelib.errors import NoBinaryForPlatformError
from nativelib.io import extract_file
from nativelib.loader import NativeLoader
from nativelib.payload import PayloadRegistry, PayloadSet
from nativelib.search_path import add_directories


@unique
class ActivationState(Enum):
    NOT_STARTED = 'not_started'
    IN_PROGRESS = 'in_progress'
    COMPLETED = 'completed'
    FAILED = 'failed'


@typing.final
class LibraryManager:
    """Extracts and activates the native library variant matching the running process.

    Payload sets are registered up front, one per ``(platform, bitness)``.
    :meth:`activate` then detects the platform, extracts the matching files
    into :attr:`target_dir`, optionally puts that directory on the library
    search path and optionally loads each file explicitly. The sequence runs
    at most once per manager, whatever the number of calling threads; later
    calls get the stored outcome, failures included.
    """

    def __init__(
        self,
        *payload_sets: PayloadSet,
        target_dir: Path | str | None = None,
        config: Config | None = None,
        logger: logging.Logger | None = None,
        loader: NativeLoader | None = None,
        platform_detector: typing.Callable[[], Platform] = detect_platform,
    ) -> None:
        self.config = config if config is not None else Config()
        if logger is None:
            logger = verbose_logger() if self.config.verbose else null_logger()
        self._logger = logger
        if target_dir is None:
            target_dir = self.config.target_dir or default_target_directory()
        self._target_dir = Path(target_dir)
        self._registry = PayloadRegistry(*payload_sets)
        self._loader = loader if loader is not None else NativeLoader(logger)
        self._detect_platform = platform_detector
        self._lock = threading.Lock()
        self._state = ActivationState.NOT_STARTED
        self._selected: PayloadSet | None = None
        self._error: BaseException | None = None

    @property
    def target_dir(self) -> Path:
        return self._target_dir

    @property
    def registry(self) -> PayloadRegistry:
        return self._registry

    @property
    def state(self) -> ActivationState:
        return self._state

    @property
    def is_activated(self) -> bool:
        return self._state is ActivationState.COMPLETED

    def register(self, payload_set: PayloadSet) -> None:
        self._registry.register(payload_set)

    def find_payload_set(self) -> PayloadSet:
        """Payload set for the current platform and bitness, without extracting anything.

        :raises UnsupportedPlatformError: If the OS is not recognized.
        :raises NoBinaryForPlatformError: If no set matches.
        """
        platform: Platform = self._detect_platform()
        bitness: Bitness = current_bitness()
        payload_set = self._registry.find(platform, bitness)
        if payload_set is None:
            raise NoBinaryForPlatformError(platform, bitness)
        return payload_set

    def _outcome(self) -> PayloadSet:
        if self._state is ActivationState.FAILED:
            raise self._error
        return self._selected

    def activate(self, explicit_load: bool | None = None) -> PayloadSet:
        """Extracts and activates the native library, once.

        :param explicit_load: Load each eligible file with the OS loader.
            Defaults to ``config.load_explicit``.
        :returns: The payload set that was activated.
        :raises NativeLibraryError: The error of the first, failed activation.
        """
        if self._state in (ActivationState.COMPLETED, ActivationState.FAILED):
            return self._outcome()

        with self._lock:
            if self._state in (ActivationState.COMPLETED, ActivationState.FAILED):
                return self._outcome()
            if explicit_load is None:
                explicit_load = self.config.load_explicit
            self._state = ActivationState.IN_PROGRESS
            try:
                self._selected = self._run(explicit_load)
            except Exception as e:
                self._error = e
                self._state = ActivationState.FAILED
                raise
            finally:
                # Interrupted (e.g. KeyboardInterrupt) rather than failed.
                if self._state is ActivationState.IN_PROGRESS and self._selected is None:
                    self._state = ActivationState.NOT_STARTED
            self._state = ActivationState.COMPLETED
            return self._selected

    def _run(self, explicit_load: bool) -> PayloadSet:
        payload_set = self.find_payload_set()
        platform = payload_set.platform
        self._logger.info(f'Selected native library for {platform} {payload_set.bitness}')

        if self.config.modify_search_path:
            add_directories(platform, str(self._target_dir), logger=self._logger)

        if explicit_load and platform is Platform.MACOS:
            self._logger.warning(
                'Explicit library loading was requested but does not work on MacOs; '
                'files are extracted and only the search path applies'
            )

        # Later files may depend on earlier ones being on disk or loaded.
        for file in payload_set.files:
            path = extract_file(self._target_dir, file, logger=self._logger)
            if explicit_load and file.explicit_load:
                self._loader.load_explicit(path, platform)
        return payload_set
