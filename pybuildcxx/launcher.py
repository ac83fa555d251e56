from collections.abc import Sequence
from pathlib import Path
import platform
import subprocess

from returns.io import IOFailure, IOResultE, IOSuccess

from pybuildcxx.errors import ArtifactNotFound, LaunchError
from pybuildcxx.targets import QUICK_TARGET

INTERRUPTED = 130


def artifact_path(output: Path, name: str, quick: bool = False) -> Path:
    """Where the build puts executable 'name', or the quick spike when 'quick' is set."""
    exe = QUICK_TARGET if quick else name
    if platform.system() == "Windows":
        exe += ".exe"
    return output / "bin" / exe


def launch(path: Path, argv: Sequence[str] = ()) -> IOResultE[int]:
    if not path.is_file():
        return IOFailure(ArtifactNotFound(path))
    try:
        returncode = subprocess.run([str(path), *argv]).returncode
    except KeyboardInterrupt:
        return IOSuccess(INTERRUPTED)
    except OSError as e:
        return IOFailure(LaunchError(path, e.strerror or str(e)))
    # killed by a signal
    if returncode < 0:
        return IOSuccess(128 - returncode)
    return IOSuccess(returncode)
