# (c) 2025 Mario "Neo" Sieg. <mario.sieg.64@gmail.com>

__version__ = '0.1.0'
__license__ = 'Apache 2.0'

from ._core import Bitness, Config, Platform, current_bitness, default_target_directory, detect_platform
from .errors import (
    DuplicatePayloadSetError,
    ExtractionError,
    LoadError,
    NativeLibraryError,
    NoBinaryForPlatformError,
    ResourceNotAvailableError,
    UnsupportedPlatformError,
)
from .io import ResourceAccessor, content_digest, extract_file
from .loader import NativeLoader
from .manager import ActivationState, LibraryManager
from .payload import PayloadFile, PayloadRegistry, PayloadSet
from .search_path import SEARCH_PATH_VARIABLES, add_directories

__all__ = [
    'ActivationState',
    'Bitness',
    'Config',
    'DuplicatePayloadSetError',
    'ExtractionError',
    'LibraryManager',
    'LoadError',
    'NativeLibraryError',
    'NativeLoader',
    'NoBinaryForPlatformError',
    'PayloadFile',
    'PayloadRegistry',
    'PayloadSet',
    'Platform',
    'ResourceAccessor',
    'ResourceNotAvailableError',
    'SEARCH_PATH_VARIABLES',
    'UnsupportedPlatformError',
    'add_directories',
    'content_digest',
    'current_bitness',
    'default_target_directory',
    'detect_platform',
    'extract_file',
]
