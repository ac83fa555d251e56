from returns.io import IOResultE

from pybuildcxx.context import Context
from pybuildcxx.launcher import artifact_path, launch


def run(context: Context, argv: list[str]) -> IOResultE[int]:
    quick = context.args.quick
    exe = artifact_path(context.output, context.args.target or context.name, quick)
    context.log(f"running '{exe}'")
    return launch(exe, argv)
