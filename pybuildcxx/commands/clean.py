from pathlib import Path
import shutil

from returns.io import IOFailure, IOResultE, IOSuccess, impure_safe

from pybuildcxx.context import Context
from pybuildcxx.errors import ValidationError


def _is_unsafe(output: Path, project: Path) -> bool:
    output, project = output.resolve(), project.resolve()
    return output == project or output in project.parents or output == Path.home()


@impure_safe
def remove_dir(d: Path) -> int:
    if d.exists():
        shutil.rmtree(d)
    return 0


def clean(context: Context) -> IOResultE[int]:
    if _is_unsafe(context.output, context.project):
        return IOFailure(
            ValidationError(
                (f"refusing to remove '{context.output}', it contains the project",),
                step="clean",
            )
        )
    if not context.output.exists():
        context.log(f"nothing to clean at '{context.output}'")
        return IOSuccess(0)
    context.log(f"removing '{context.output}'")
    return remove_dir(context.output)
