from typing import Literal

Action = Literal["build", "clean", "run", "targets"]
BuildType = Literal["Debug", "Release"]
TargetKind = Literal["library", "executable", "test", "spike"]

Cmd = tuple[str, ...]
