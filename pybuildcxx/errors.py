from collections.abc import Iterable
from pathlib import Path


class PybuildcxxError(Exception):
    """Base of every error that terminates a pybuildcxx invocation."""

    exit_code: int = 1

    def __init__(self, step: str, message: str):
        super().__init__(message)
        self.step = step
        self.message = message


class LayoutError(PybuildcxxError):
    exit_code = 2

    def __init__(self, directory: Path, reason: str):
        super().__init__("scan", f"cannot read '{directory}': {reason}")
        self.directory = directory


class ConfigError(PybuildcxxError):
    exit_code = 2

    def __init__(self, config_file: Path, reason: str):
        super().__init__("config", f"'{config_file}': {reason}")
        self.config_file = config_file


class ValidationError(PybuildcxxError):
    exit_code = 1

    def __init__(self, problems: Iterable[str], step: str = "configure"):
        self.problems: tuple[str, ...] = tuple(problems)
        super().__init__(step, "; ".join(self.problems))


class ExternalToolError(PybuildcxxError):
    def __init__(self, step: str, command: tuple[str, ...], returncode: int):
        super().__init__(
            step, f"'{' '.join(command)}' exited with status {returncode}"
        )
        self.command = command
        # signals are reported as negative return codes
        self.exit_code = returncode if returncode > 0 else 128 - returncode


class ArtifactNotFound(PybuildcxxError):
    exit_code = 1

    def __init__(self, path: Path):
        super().__init__("run", f"'{path}' not found, did you build it?")
        self.path = path


class LaunchError(PybuildcxxError):
    # what a shell reports for a file it cannot execute
    exit_code = 126

    def __init__(self, path: Path, reason: str):
        super().__init__("run", f"cannot execute '{path}': {reason}")
        self.path = path
