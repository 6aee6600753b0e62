# (c) 2025 Mario "Neo" Sieg. <mario.sieg.64@gmail.com>

import sys
import types
from pathlib import Path

import pytest

from nativelib import *


def _write(path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)


def test_detect_linux(tmp_path) -> None:
    _write(tmp_path / 'proc/sys/kernel/ostype', 'Linux\n')
    assert detect_platform(environ={}, root=tmp_path) is Platform.LINUX


def test_detect_linux_case_insensitive(tmp_path) -> None:
    _write(tmp_path / 'proc/sys/kernel/ostype', 'linux')
    assert detect_platform(environ={}, root=tmp_path) is Platform.LINUX


def test_detect_macos(tmp_path) -> None:
    _write(tmp_path / 'System/Library/CoreServices/SystemVersion.plist', '<plist/>')
    assert detect_platform(environ={}, root=tmp_path) is Platform.MACOS


_posix_only = pytest.mark.skipif(sys.platform == 'win32', reason='needs a backslash in a directory name')


@_posix_only
def test_detect_windows(tmp_path) -> None:
    windir = tmp_path / 'C:\\Windows'
    windir.mkdir()
    _write(tmp_path / 'proc/sys/kernel/ostype', 'Linux\n')
    assert detect_platform(environ={'windir': str(windir)}, root=tmp_path) is Platform.WINDOWS


@_posix_only
def test_windir_must_exist(tmp_path) -> None:
    _write(tmp_path / 'proc/sys/kernel/ostype', 'Linux\n')
    environ = {'windir': str(tmp_path / 'C:\\Missing')}
    assert detect_platform(environ=environ, root=tmp_path) is Platform.LINUX


def test_windir_without_backslash_is_ignored(tmp_path) -> None:
    plain = tmp_path / 'windows'
    plain.mkdir()
    with pytest.raises(UnsupportedPlatformError):
        detect_platform(environ={'windir': str(plain).replace('\\', '/')}, root=tmp_path)


def test_no_markers_is_unsupported(tmp_path) -> None:
    with pytest.raises(UnsupportedPlatformError) as e:
        detect_platform(environ={}, root=tmp_path)
    assert e.value.message == 'Unsupported OS!'


def test_unknown_kernel_is_reported(tmp_path) -> None:
    _write(tmp_path / 'proc/sys/kernel/ostype', 'FreeBSD\n')
    with pytest.raises(UnsupportedPlatformError) as e:
        detect_platform(environ={}, root=tmp_path)
    assert 'FreeBSD' in e.value.message


@pytest.mark.skipif(not sys.platform.startswith('linux'), reason='needs a Linux host')
def test_detect_host_linux() -> None:
    assert detect_platform() is Platform.LINUX


def test_bitness_matches_interpreter() -> None:
    expected = Bitness.X64 if sys.maxsize > 2**32 else Bitness.X32
    assert current_bitness() is expected
    assert current_bitness() is current_bitness()


def test_enum_display_names() -> None:
    assert str(Platform.MACOS) == 'MacOs'
    assert str(Bitness.X64) == 'x64'


def test_unreadable_ostype_counts_as_absent(tmp_path, monkeypatch) -> None:
    ostype = tmp_path / 'proc/sys/kernel/ostype'
    _write(ostype, 'Linux\n')
    _write(tmp_path / 'System/Library/CoreServices/SystemVersion.plist', '<plist/>')
    real_read_text = Path.read_text

    def read_text(self, *args, **kwargs) -> str:
        if self == ostype:
            raise PermissionError(13, 'Permission denied', str(self))
        return real_read_text(self, *args, **kwargs)

    monkeypatch.setattr(Path, 'read_text', read_text)
    assert detect_platform(environ={}, root=tmp_path) is Platform.MACOS
    (tmp_path / 'System/Library/CoreServices/SystemVersion.plist').unlink()
    with pytest.raises(UnsupportedPlatformError) as e:
        detect_platform(environ={}, root=tmp_path)
    assert e.value.message == 'Unsupported OS!'


def test_default_target_directory_is_main_script_dir(tmp_path, monkeypatch) -> None:
    script = tmp_path / 'app' / 'main.py'
    _write(script, '')
    monkeypatch.setitem(sys.modules, '__main__', types.SimpleNamespace(__file__=str(script)))
    assert default_target_directory() == script.parent.resolve()


def test_default_target_directory_falls_back_to_cwd(tmp_path, monkeypatch) -> None:
    monkeypatch.setitem(sys.modules, '__main__', types.SimpleNamespace())
    monkeypatch.chdir(tmp_path)
    assert default_target_directory() == Path.cwd()
    assert default_target_directory().resolve() == tmp_path.resolve()
