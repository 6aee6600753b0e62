# (c) 2025 Mario "Neo" Sieg. <mario.sieg.64@gmail.com>

from functools import lru_cache

from cffi import FFI

# LoadLibraryEx search flags
LOAD_LIBRARY_SEARCH_DLL_LOAD_DIR: int = 0x00000100
LOAD_LIBRARY_SEARCH_APPLICATION_DIR: int = 0x00000200
LOAD_LIBRARY_SEARCH_USER_DIRS: int = 0x00000400
LOAD_LIBRARY_SEARCH_SYSTEM32: int = 0x00000800
LOAD_LIBRARY_SEARCH_DEFAULT_DIRS: int = 0x00001000

# Prefer dependencies co-located with the DLL over system-wide ones.
LOAD_LIBRARY_SEARCH_FLAGS: int = (
    LOAD_LIBRARY_SEARCH_APPLICATION_DIR
    | LOAD_LIBRARY_SEARCH_DEFAULT_DIRS
    | LOAD_LIBRARY_SEARCH_DLL_LOAD_DIR
    | LOAD_LIBRARY_SEARCH_SYSTEM32
    | LOAD_LIBRARY_SEARCH_USER_DIRS
)

__KERNEL32_CDECLS: str = """
void *LoadLibraryExW(const wchar_t *lpLibFileName, void *hFile, uint32_t dwFlags);
"""

ffi = FFI()
ffi.cdef(__KERNEL32_CDECLS)


@lru_cache(maxsize=1)
def load_kernel32() -> object:
    """Open kernel32 once; only meaningful on Windows."""
    return ffi.dlopen('kernel32.dll')
