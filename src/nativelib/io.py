# (c) 2025 Mario "Neo" Sieg. <mario.sieg.64@gmail.com>

import contextlib
import hashlib
import logging
import os
import tempfile
from importlib import resources
from pathlib import Path, PurePosixPath

from nativelib._logging import null_logger
from nativelib.errors import ExtractionError, ResourceNotAvailableError
from nativelib.payload import PayloadFile

_CHUNK_SIZE: int = 1024 * 1024


def content_digest(data: bytes | None = None, *, path: Path | None = None) -> bytes:
    """MD5 digest of an in-memory payload or of a file streamed from disk.

    Only used to tell whether an extracted file is current, not to detect tampering.
    """
    h = hashlib.md5(usedforsecurity=False)
    if path is not None:
        with open(path, 'rb') as f:
            while chunk := f.read(_CHUNK_SIZE):
                h.update(chunk)
    else:
        h.update(data)
    return h.digest()


def _write_atomic(path: Path, data: bytes) -> None:
    # Readers racing with us see either the old file or the complete new one.
    fd, tmp_name = tempfile.mkstemp(prefix=f'.{path.name}.', suffix='.tmp', dir=path.parent)
    try:
        with os.fdopen(fd, 'wb') as f:
            f.write(data)
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, path)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(tmp_name)
        raise


def extract_file(target_dir: Path | str, file: PayloadFile, *, logger: logging.Logger | None = None) -> Path:
    """Writes ``file`` to ``target_dir`` unless an identical copy is already there.

    An existing file whose digest differs from the payload is stale or corrupt
    and gets replaced.

    :returns: Path of the extracted file.
    :raises ExtractionError: On any I/O failure.
    """
    if logger is None:
        logger = null_logger()
    path = Path(target_dir) / file.name
    logger.info(f'Unpacking native library {file.name} to {path}')
    try:
        if path.is_file():
            logger.debug(f'File {path} already exists, computing hashes')
            if content_digest(path=path) == content_digest(file.data):
                logger.debug('Hashes are equal, no need to unpack')
                return path
            logger.info(f'File {path} differs from the embedded payload, overwriting')
        path.parent.mkdir(parents=True, exist_ok=True)
        _write_atomic(path, file.data)
    except OSError as e:
        raise ExtractionError(f'Failed to extract {file.name} to {path}: {e}', path) from e
    return path


class ResourceAccessor:
    """Reads binary resources shipped as package data of ``package``."""

    def __init__(self, package: str) -> None:
        self.package = package

    def _resolve(self, name: str) -> str:
        # Accept both 'libfoo.so' and the dotted 'mypkg.libfoo.so' spelling.
        prefix = f'{self.package}.'
        return name[len(prefix):] if name.startswith(prefix) else name

    def binary(self, name: str) -> bytes:
        """Returns the resource ``name`` as bytes.

        :raises ResourceNotAvailableError: If the package has no such resource.
        """
        try:
            resource = resources.files(self.package).joinpath(self._resolve(name))
            if not resource.is_file():
                raise ResourceNotAvailableError(f"Resource '{name}' not available in package '{self.package}'")
            return resource.read_bytes()
        except (ModuleNotFoundError, FileNotFoundError) as e:
            raise ResourceNotAvailableError(f"Resource '{name}' not available in package '{self.package}'") from e

    def payload(self, name: str, file_name: str | None = None, *, explicit_load: bool = True) -> PayloadFile:
        """Builds a :class:`PayloadFile` from the resource ``name``, extracted as ``file_name``."""
        if file_name is None:
            file_name = PurePosixPath(self._resolve(name)).name
        return PayloadFile(file_name, self.binary(name), explicit_load=explicit_load)
