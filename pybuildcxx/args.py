from pathlib import Path
from typing import Protocol
import argparse

from pybuildcxx.__version__ import __version__
from pybuildcxx.types import Action


class ArgsConfig(Protocol):
    action: Action
    dir: Path
    build_dir: Path | None
    verbose: bool

    target: str | None
    quick: bool
    debug: bool
    define: str | None
    feature: list[str]
    no_feature: list[str]


def _add_common_options(parser: argparse.ArgumentParser, suppress_default=False):
    """Global options, accepted before and after the subcommand."""

    def default(value):
        return argparse.SUPPRESS if suppress_default else value

    parser.add_argument("-d", "--dir", type=Path, default=default(Path.cwd()))
    parser.add_argument("-bd", "--build-dir", type=Path, default=default(None))
    parser.add_argument(
        "-v", "--verbose", action="store_true", default=default(False)
    )


def _add_mode_options(parser: argparse.ArgumentParser):
    parser.add_argument("--define", metavar="VALUE", default=None)
    parser.add_argument("--quick", action="store_true")
    parser.add_argument("--target", metavar="NAME", default=None)
    parser.add_argument("--debug", action="store_true")
    parser.add_argument(
        "--feature", metavar="NAME", action="append", default=[]
    )
    parser.add_argument(
        "--no-feature", metavar="NAME", action="append", default=[]
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pybuildcxx",
        description="Configures, builds and runs C++ projects through CMake",
        epilog="",
    )
    _add_common_options(parser)
    parser.add_argument("--version", action="version", version=__version__)

    subparser = parser.add_subparsers(dest="action", required=True)

    build = subparser.add_parser("build", help="configure and build the project")
    _add_common_options(build, suppress_default=True)
    _add_mode_options(build)

    clean = subparser.add_parser("clean", help="remove the output directory")
    _add_common_options(clean, suppress_default=True)

    run = subparser.add_parser("run", help="run a built executable")
    _add_common_options(run, suppress_default=True)
    run.add_argument("--target", metavar="NAME", default=None)
    run.add_argument("--quick", action="store_true")

    targets = subparser.add_parser("targets", help="list the targets a build would create")
    _add_common_options(targets, suppress_default=True)
    _add_mode_options(targets)

    return parser


def args_parse(argv: list[str]) -> tuple[ArgsConfig, list[str]]:
    """Returns the parsed arguments and whatever follows '--' (forwarded to 'run')."""
    if "--" in argv:
        idx = argv.index("--")
        argv, rest = argv[:idx], argv[idx + 1 :]
    else:
        rest = []
    return build_parser().parse_args(argv), rest  # type: ignore
