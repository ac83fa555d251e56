import sys

from returns.pipeline import is_successful
from returns.unsafe import unsafe_perform_io

from pybuildcxx.args import args_parse
from pybuildcxx.commands import dispatch
from pybuildcxx.context import context_load
from pybuildcxx.errors import PybuildcxxError


def report(error: Exception) -> int:
    if isinstance(error, PybuildcxxError):
        print(f"[pybuildcxx] Error ({error.step}): {error.message}", file=sys.stderr)
        return error.exit_code
    print(f"[pybuildcxx] Error: {error}", file=sys.stderr)
    return 1


def pybuildcxx(argv: list[str]) -> int:
    args, rest = args_parse(argv)
    result = unsafe_perform_io(
        context_load(args).bind(lambda context: dispatch(context, rest))
    )
    if is_successful(result):
        return result.unwrap()
    return report(result.failure())


def main():
    sys.exit(pybuildcxx(sys.argv[1:]))


def build_main():
    sys.exit(pybuildcxx(["build", *sys.argv[1:]]))


def clean_main():
    sys.exit(pybuildcxx(["clean", *sys.argv[1:]]))


def run_main():
    sys.exit(pybuildcxx(["run", *sys.argv[1:]]))
