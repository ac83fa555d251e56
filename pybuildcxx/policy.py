"""Compiler warnings, language standard and preprocessor definitions per target kind.

Every target gets its flags from here. Changing a warning or a definition in
this module changes it for every target kind at once.
"""

from collections.abc import Iterable, Mapping
import re

from pybuildcxx.errors import ValidationError
from pybuildcxx.types import TargetKind

WARNINGS: tuple[str, ...] = (
    "-Wall",
    "-Wextra",
    "-Wpedantic",
    "-Wshadow",
    "-Wnon-virtual-dtor",
    "-Wold-style-cast",
    "-Wcast-align",
    "-Wunused",
    "-Woverloaded-virtual",
    "-Wconversion",
    "-Wsign-conversion",
    "-Wnull-dereference",
    "-Wformat=2",
)

# Spelled the MSVC way when CMake drives cl.exe
MSVC_WARNINGS: tuple[str, ...] = ("/W4", "/permissive-")

CXX_STANDARD = 17

TESTING = "TESTING"
EXPERIMENTAL = "EXPERIMENTAL"

KIND_DEFINITIONS: dict[TargetKind, tuple[str, ...]] = {
    "library": (),
    "executable": (),
    "test": (TESTING,),
    "spike": (EXPERIMENTAL,),
}

FEATURE_KINDS: frozenset[TargetKind] = frozenset(("library", "executable"))

_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def feature_macro(name: str) -> str:
    return "ENABLE_" + re.sub(r"[^A-Za-z0-9_]", "_", name).upper()


def feature_definitions(features: Mapping[str, bool]) -> tuple[str, ...]:
    return tuple(sorted(feature_macro(n) for n, enabled in features.items() if enabled))


def define_definition(value: str) -> str:
    """Validates a '--define' value of the form NAME or NAME=VALUE."""
    name = value.partition("=")[0]
    if not _IDENTIFIER.fullmatch(name):
        raise ValidationError(
            (f"'--define {value}': '{name}' is not a valid macro name",)
        )
    return value


def definitions(
    kind: TargetKind,
    features: Mapping[str, bool],
    extra: Iterable[str] = (),
) -> tuple[str, ...]:
    defs = set(KIND_DEFINITIONS[kind])
    if kind in FEATURE_KINDS:
        defs.update(feature_definitions(features))
    defs.update(extra)
    return tuple(sorted(defs))

