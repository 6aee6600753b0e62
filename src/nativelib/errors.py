# (c) 2025 Mario "Neo" Sieg. <mario.sieg.64@gmail.com>

import typing
from pathlib import Path

if typing.TYPE_CHECKING:
    from nativelib._core import Bitness, Platform


class NativeLibraryError(Exception):
    """Base class for all errors raised while resolving a native library."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnsupportedPlatformError(NativeLibraryError):
    """The running OS is none of Windows, Linux or macOS."""


class NoBinaryForPlatformError(NativeLibraryError):
    """No payload set was registered for the detected platform and bitness."""

    def __init__(self, platform: 'Platform', bitness: 'Bitness'):
        super().__init__(f"There is no supported native library for platform '{platform}' and bitness '{bitness}'")
        self.platform = platform
        self.bitness = bitness


class ExtractionError(NativeLibraryError):
    """A payload could not be written to (or read back from) the target directory."""

    def __init__(self, message: str, path: Path):
        super().__init__(message)
        self.path = path


class LoadError(NativeLibraryError):
    """The OS refused to map an extracted library into the process."""

    def __init__(self, message: str, path: Path, platform: 'Platform'):
        super().__init__(message)
        self.path = path
        self.platform = platform


class ResourceNotAvailableError(NativeLibraryError, LookupError):
    """The resource store has no entry with the requested name."""


class DuplicatePayloadSetError(NativeLibraryError, ValueError):
    """A payload set for the same platform and bitness is already registered."""
