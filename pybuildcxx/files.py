from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
import os

from returns.io import IOFailure, IOResultE, IOSuccess

from pybuildcxx.config import LayoutConfig
from pybuildcxx.errors import LayoutError

SOURCE_SUFFIXES = frozenset((".cpp", ".cc", ".cxx"))
HEADER_SUFFIXES = frozenset((".h", ".hh", ".hpp", ".hxx"))

Files = tuple[Path, ...]


@dataclass(frozen=True)
class SpikeDir:
    name: str
    directory: Path
    sources: Files


@dataclass(frozen=True)
class ProjectLayout:
    """Snapshot of the conventional project directories.

    A role is ``None`` when its directory does not exist. An existing
    directory without matching files is an empty tuple.
    """

    root: Path
    include_dir: Path | None
    headers: Files | None
    sources: Files | None
    library: Files | None
    library_dir: Path | None
    tests: Files | None
    spikes: tuple[SpikeDir, ...] | None


def is_source(file: Path) -> bool:
    return file.suffix in SOURCE_SUFFIXES


def is_header(file: Path) -> bool:
    return file.suffix in HEADER_SUFFIXES


def _raise(error: OSError):
    raise error


def _walk(directory: Path) -> Iterator[Path]:
    """Walks 'directory' recursively in sorted order. Read errors propagate."""
    if not os.access(directory, os.R_OK | os.X_OK):
        raise PermissionError(13, "Permission denied", str(directory))
    for dirpath, dirnames, filenames in os.walk(directory, onerror=_raise):
        dirnames.sort()
        for name in sorted(filenames):
            yield Path(dirpath, name)


def scan(directory: Path, predicate) -> Files | None:
    if not directory.is_dir():
        return None
    try:
        return tuple(f for f in _walk(directory) if predicate(f))
    except OSError as e:
        raise LayoutError(Path(e.filename or directory), e.strerror or str(e)) from e


def scan_spikes(spike_root: Path) -> tuple[SpikeDir, ...] | None:
    if not spike_root.is_dir():
        return None
    try:
        if not os.access(spike_root, os.R_OK | os.X_OK):
            raise PermissionError(13, "Permission denied", str(spike_root))
        directories = sorted(d for d in spike_root.iterdir() if d.is_dir())
    except OSError as e:
        raise LayoutError(spike_root, e.strerror or str(e)) from e
    return tuple(
        SpikeDir(name=d.name, directory=d, sources=scan(d, is_source) or ())
        for d in directories
    )


def layout_load(root: Path, layout: LayoutConfig) -> IOResultE[ProjectLayout]:
    include_dir = root / layout["include"]
    library_dir = root / layout["lib"]
    try:
        headers = scan(include_dir, is_header)
        return IOSuccess(
            ProjectLayout(
                root=root,
                include_dir=include_dir if headers is not None else None,
                headers=headers,
                sources=scan(root / layout["src"], is_source),
                library=scan(library_dir, is_source),
                library_dir=library_dir if library_dir.is_dir() else None,
                tests=scan(root / layout["tests"], is_source),
                spikes=scan_spikes(root / layout["spikes"]),
            )
        )
    except LayoutError as e:
        return IOFailure(e)
