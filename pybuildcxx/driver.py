import subprocess
import sys

from returns.io import IOFailure, IOResultE, IOSuccess, impure_safe

from pybuildcxx import cmake
from pybuildcxx.context import Context
from pybuildcxx.errors import ExternalToolError
from pybuildcxx.files import layout_load
from pybuildcxx.targets import Target, synthesize
from pybuildcxx.types import Cmd

# what a shell reports when the executable does not exist
COMMAND_NOT_FOUND = 127


def load_targets(context: Context) -> IOResultE[tuple[Target, ...]]:
    return layout_load(context.project, context.config["layout"]).bind_result(
        lambda layout: synthesize(
            layout,
            context.request,
            context.name,
            context.config["project"]["cxx_standard"],
        )
    )


@impure_safe
def write_build_files(context: Context, targets: tuple[Target, ...]):
    context.output.mkdir(parents=True, exist_ok=True)
    cmakelists = cmake.write_cmakelists(context.name, context.output, targets)
    context.debug(f"  wrote '{cmakelists}'")
    return cmakelists


def execute(context: Context, step: str, cmd: Cmd) -> IOResultE[Cmd]:
    """Runs one external step with its output captured.

    The captured output is echoed when the step fails, or always with --verbose.
    """
    context.log(f"{step}: {' '.join(cmd)}" if context.args.verbose else step)
    try:
        res = subprocess.run(cmd, capture_output=True, text=True)
    except FileNotFoundError:
        print(f"[pybuildcxx] '{cmd[0]}' not found, is it installed?", file=sys.stderr)
        return IOFailure(ExternalToolError(step, cmd, COMMAND_NOT_FOUND))

    if res.returncode != 0 or context.args.verbose:
        if res.stdout:
            print(res.stdout, end="")
        if res.stderr:
            print(res.stderr, end="", file=sys.stderr)
    if res.returncode != 0:
        return IOFailure(ExternalToolError(step, cmd, res.returncode))
    return IOSuccess(cmd)


def configure(context: Context) -> IOResultE[Cmd]:
    return execute(
        context,
        "configuring",
        cmake.configure_command(
            context.output, context.request, context.config["project"]["generator"]
        ),
    )


def build(context: Context) -> IOResultE[Cmd]:
    return execute(
        context, "building", cmake.build_command(context.output, context.request)
    )
