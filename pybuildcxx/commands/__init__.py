from returns.io import IOFailure, IOResultE

from pybuildcxx.context import Context
from pybuildcxx.commands.build import build
from pybuildcxx.commands.clean import clean
from pybuildcxx.commands.run_cmd import run
from pybuildcxx.commands.targets import targets


def dispatch(context: Context, argv: list[str]) -> IOResultE[int]:
    match context.args.action:
        case "build":
            return build(context)
        case "clean":
            return clean(context)
        case "run":
            return run(context, argv)
        case "targets":
            return targets(context)
        case action:
            return IOFailure(NotImplementedError(f"{action} is not implemented yet"))


__all__ = ["build", "clean", "run", "targets", "dispatch"]
