# (c) 2025 Mario "Neo" Sieg. <mario.sieg.64@gmail.com>

import threading
from collections.abc import Iterator
from dataclasses import dataclass, field

from nativelib._core import Bitness, Platform
from nativelib.errors import DuplicatePayloadSetError


def _validate_file_name(name: str) -> None:
    if not name or name in ('.', '..'):
        raise ValueError(f'Invalid payload file name: {name!r}')
    if '/' in name or '\\' in name or '\0' in name:
        raise ValueError(f'Payload file name must not contain path separators: {name!r}')


@dataclass(frozen=True)
class PayloadFile:
    """A native library file carried in memory until it is extracted.

    ``explicit_load=False`` marks auxiliary files (e.g. dependency DLLs) that
    must land next to the library but are never loaded explicitly.
    """

    name: str
    data: bytes = field(repr=False)
    explicit_load: bool = True

    def __post_init__(self) -> None:
        _validate_file_name(self.name)
        if not isinstance(self.data, bytes):
            object.__setattr__(self, 'data', bytes(self.data))


@dataclass(frozen=True)
class PayloadSet:
    """All files making up one native library variant, in extraction order."""

    platform: Platform
    bitness: Bitness
    files: tuple[PayloadFile, ...]

    def __init__(self, platform: Platform, bitness: Bitness, *files: PayloadFile) -> None:
        object.__setattr__(self, 'platform', platform)
        object.__setattr__(self, 'bitness', bitness)
        object.__setattr__(self, 'files', tuple(files))

    @property
    def key(self) -> tuple[Platform, Bitness]:
        return self.platform, self.bitness


class PayloadRegistry:
    """Payload sets keyed by ``(platform, bitness)``, at most one per key."""

    def __init__(self, *payload_sets: PayloadSet) -> None:
        self._sets: dict[tuple[Platform, Bitness], PayloadSet] = {}
        self._lock = threading.Lock()
        for payload_set in payload_sets:
            self.register(payload_set)

    def register(self, payload_set: PayloadSet) -> None:
        """Adds a payload set. Raises :class:`DuplicatePayloadSetError` if its key is taken."""
        with self._lock:
            if payload_set.key in self._sets:
                raise DuplicatePayloadSetError(
                    f"A payload set for platform '{payload_set.platform}' and bitness '{payload_set.bitness}' is already registered"
                )
            self._sets[payload_set.key] = payload_set

    def find(self, platform: Platform, bitness: Bitness) -> PayloadSet | None:
        """Exact-match lookup; no fallback between bitnesses or platforms."""
        return self._sets.get((platform, bitness))

    def __len__(self) -> int:
        return len(self._sets)

    def __iter__(self) -> Iterator[PayloadSet]:
        return iter(list(self._sets.values()))

    def __contains__(self, key: tuple[Platform, Bitness]) -> bool:
        return key in self._sets
