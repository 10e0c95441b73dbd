"""Unit tests for `PATH`-based executable resolution."""

from __future__ import annotations

import os
from pathlib import Path
import sys
import threading

import pytest

from whatexec.detection.detector import PosixExecutableDetector, WindowsExecutableDetector
from whatexec.errors import ExecutableNotFoundError, InvalidCommandError
from whatexec.resolvers.path_environment import PathEnvironment
from whatexec.resolvers.path_resolver import PathExecutableResolver

pytestmark = pytest.mark.skipif(
    sys.platform.startswith("win"), reason="relies on POSIX permission bits"
)


def _resolver(
    detector: PosixExecutableDetector, *directories: Path
) -> PathExecutableResolver:
    env = {"PATH": os.pathsep.join(str(directory) for directory in directories)}
    return PathExecutableResolver(detector, PathEnvironment(env=env, platform="linux"))


def test_resolves_from_later_path_directory_after_checking_earlier_one(
    tmp_path: Path,
    make_executable,
    posix_detector: PosixExecutableDetector,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """`ls` present only in the second directory resolves there after the first is checked."""

    usr_bin = tmp_path / "usr" / "bin"
    usr_bin.mkdir(parents=True)
    ls = make_executable(tmp_path / "bin" / "ls")
    resolver = _resolver(posix_detector, usr_bin, ls.parent)

    checked: list[str] = []
    original_isfile = os.path.isfile

    def _recording_isfile(path: str) -> bool:
        checked.append(path)
        return original_isfile(path)

    monkeypatch.setattr("whatexec.resolvers.path_resolver.os.path.isfile", _recording_isfile)

    resolved = resolver.try_resolve("ls")

    assert resolved is not None
    assert resolved.path == ls
    assert checked[0] == str(usr_bin / "ls")


def test_path_like_query_resolves_literally_regardless_of_path(
    tmp_path: Path,
    make_executable,
    posix_detector: PosixExecutableDetector,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """`./script.sh` resolves to its absolute path without consulting `PATH`."""

    script = make_executable(tmp_path / "script.sh")
    monkeypatch.chdir(tmp_path)
    resolver = PathExecutableResolver(
        posix_detector, PathEnvironment(env={}, platform="linux")
    )

    resolved = resolver.resolve("./script.sh")

    assert resolved.path.is_absolute()
    assert resolved.path.resolve() == script.resolve()


def test_windows_extension_candidates_resolve_lower_case_file(
    tmp_path: Path, make_executable
) -> None:
    """With `PATHEXT` `.EXE;.BAT`, `foo` resolves to an existing `foo.exe`."""

    foo = make_executable(tmp_path / "foo.exe")
    detector = WindowsExecutableDetector("win32")
    environment = PathEnvironment(
        env={"PATH": str(tmp_path), "PATHEXT": ".EXE;.BAT"}, platform="win32"
    )
    resolver = PathExecutableResolver(detector, environment)

    resolved = resolver.try_resolve("foo")

    assert resolved is not None
    assert resolved.path.parent == foo.parent
    assert resolved.path.name.lower() == "foo.exe"


def test_name_with_extension_skips_extension_candidates(
    tmp_path: Path, make_executable, posix_detector: PosixExecutableDetector
) -> None:
    """A query that already has an extension is only tried as written."""

    make_executable(tmp_path / "run.sh.sh")
    script = make_executable(tmp_path / "run.sh")
    resolver = _resolver(posix_detector, tmp_path)

    _, matches = resolver.try_resolve_many(["run.sh"])

    assert [match.path for match in matches] == [script]


def test_non_executable_candidates_are_skipped(
    tmp_path: Path,
    make_executable,
    make_plain_file,
    posix_detector: PosixExecutableDetector,
) -> None:
    """A same-named data file earlier on `PATH` must not shadow a real executable."""

    make_plain_file(tmp_path / "first" / "tool")
    tool = make_executable(tmp_path / "second" / "tool")
    resolver = _resolver(posix_detector, tmp_path / "first", tmp_path / "second")

    assert resolver.resolve("tool").path == tool


def test_missing_path_returns_none_or_raises_not_found(
    posix_detector: PosixExecutableDetector,
) -> None:
    """An unreadable `PATH` is a miss for `try_resolve` and an error for `resolve`."""

    resolver = PathExecutableResolver(
        posix_detector, PathEnvironment(env={}, platform="linux")
    )

    assert resolver.try_resolve("git") is None
    with pytest.raises(ExecutableNotFoundError) as exc_info:
        resolver.resolve("git")
    assert exc_info.value.names == ("git",)
    assert isinstance(exc_info.value, FileNotFoundError)


def test_empty_name_is_invalid_input(posix_detector: PosixExecutableDetector) -> None:
    """Blank names are rejected before any filesystem access."""

    resolver = _resolver(posix_detector, Path("/nonexistent"))

    with pytest.raises(InvalidCommandError):
        resolver.try_resolve("   ")
    with pytest.raises(InvalidCommandError):
        resolver.try_resolve_many(["git", ""])


def test_try_resolve_many_returns_union_of_every_path_match(
    tmp_path: Path, make_executable, posix_detector: PosixExecutableDetector
) -> None:
    """Batch lookups return all matches for all names, not one per name."""

    first_git = make_executable(tmp_path / "a" / "git")
    second_git = make_executable(tmp_path / "b" / "git")
    make_ = make_executable(tmp_path / "b" / "make")
    resolver = _resolver(posix_detector, tmp_path / "a", tmp_path / "b")

    found_any, matches = resolver.try_resolve_many(["git", "make", "absent"])

    assert found_any is True
    assert [match.path for match in matches] == [first_git, second_git, make_]


def test_resolve_many_raises_when_nothing_matches(
    tmp_path: Path, posix_detector: PosixExecutableDetector
) -> None:
    """The throwing batch form lists every requested name in its error."""

    resolver = _resolver(posix_detector, tmp_path)

    with pytest.raises(ExecutableNotFoundError, match="absent,missing"):
        resolver.resolve_many(["absent", "missing"])


def test_concurrent_lookups_return_consistent_results(
    tmp_path: Path, make_executable, posix_detector: PosixExecutableDetector
) -> None:
    """Resolution holds no mutable state, so parallel callers agree."""

    tool = make_executable(tmp_path / "tool")
    resolver = _resolver(posix_detector, tmp_path)
    results: list[Path | None] = []
    lock = threading.Lock()

    def _lookup() -> None:
        resolved = resolver.try_resolve("tool")
        with lock:
            results.append(None if resolved is None else resolved.path)

    threads = [threading.Thread(target=_lookup) for _ in range(16)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert results == [tool] * 16


def test_every_extension_is_tried_in_a_directory_before_the_next_one(
    tmp_path: Path, make_executable, posix_detector: PosixExecutableDetector
) -> None:
    """`d1/foo.sh` wins over `d2/foo` because directories vary slowest."""

    in_first = make_executable(tmp_path / "d1" / "foo.sh")
    make_executable(tmp_path / "d2" / "foo")
    resolver = _resolver(posix_detector, tmp_path / "d1", tmp_path / "d2")

    resolved = resolver.try_resolve("foo")

    assert resolved is not None
    assert resolved.path == in_first


@pytest.mark.parametrize(
    ("pathext", "expected"),
    [(".BAT;.EXE", "foo.bat"), (".EXE;.BAT", "foo.exe")],
)
def test_windows_pathext_order_decides_within_one_directory(
    tmp_path: Path, make_executable, pathext: str, expected: str
) -> None:
    """With several variants in one directory, the first `PATHEXT` entry wins."""

    make_executable(tmp_path / "bin" / "foo.bat")
    make_executable(tmp_path / "bin" / "foo.exe")
    environment = PathEnvironment(
        env={"PATH": str(tmp_path / "bin"), "PATHEXT": pathext}, platform="win32"
    )
    resolver = PathExecutableResolver(WindowsExecutableDetector("win32"), environment)

    resolved = resolver.try_resolve("foo")

    assert resolved is not None
    assert resolved.path.name.lower() == expected


def test_windows_earlier_directory_beats_preferred_extension(
    tmp_path: Path, make_executable
) -> None:
    """A later `PATHEXT` entry in the first directory beats an earlier one further along."""

    in_first = make_executable(tmp_path / "d1" / "foo.bat")
    make_executable(tmp_path / "d2" / "foo.exe")
    environment = PathEnvironment(
        env={
            "PATH": ";".join([str(tmp_path / "d1"), str(tmp_path / "d2")]),
            "PATHEXT": ".EXE;.BAT",
        },
        platform="win32",
    )
    resolver = PathExecutableResolver(WindowsExecutableDetector("win32"), environment)

    resolved = resolver.try_resolve("foo")

    assert resolved is not None
    assert resolved.path.parent == in_first.parent
    assert resolved.path.name.lower() == "foo.bat"
