from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
import re

from returns.result import Failure, Result, Success

from pybuildcxx import policy
from pybuildcxx.errors import ValidationError
from pybuildcxx.files import ProjectLayout
from pybuildcxx.types import BuildType, TargetKind

QUICK_TARGET = "quick_spike"
SPIKE_PREFIX = "spike_"

# what CMake accepts as a target name
TARGET_NAME = re.compile(r"[A-Za-z0-9_.+-]+")


@dataclass(frozen=True)
class BuildRequest:
    """What the user asked for. Quick and debug are independent of each other."""

    quick: bool = False
    quick_target: str | None = None
    debug: bool = False
    define: str | None = None
    features: Mapping[str, bool] = field(default_factory=dict)

    @property
    def build_type(self) -> BuildType:
        return "Debug" if self.debug else "Release"


@dataclass(frozen=True)
class Target:
    name: str
    kind: TargetKind
    sources: tuple[Path, ...]
    include_dirs: tuple[Path, ...]
    definitions: tuple[str, ...]
    warnings: tuple[str, ...]
    cxx_standard: int
    depends: str | None = None
    msvc_warnings: tuple[str, ...] = ()


def _target(
    name: str,
    kind: TargetKind,
    sources: tuple[Path, ...],
    include_dirs: tuple[Path, ...],
    depends: str | None,
    features: Mapping[str, bool],
    cxx_standard: int,
    extra: tuple[str, ...] = (),
) -> Target:
    return Target(
        name=name,
        kind=kind,
        sources=sources,
        include_dirs=include_dirs,
        definitions=policy.definitions(kind, features, extra),
        warnings=policy.WARNINGS,
        msvc_warnings=policy.MSVC_WARNINGS,
        cxx_standard=cxx_standard,
        depends=depends,
    )


def quick_source(layout: ProjectLayout, name: str) -> Result[Path, str]:
    """Finds the one source file called 'name' (with or without suffix)."""
    candidates = (
        *(layout.sources or ()),
        *(f for spike in layout.spikes or () for f in spike.sources),
    )
    matches = tuple(f for f in candidates if name in (f.name, f.stem))
    match matches:
        case ():
            return Failure(f"quick target '{name}' matches no source file")
        case (file,):
            return Success(file)
        case _:
            return Failure(
                f"quick target '{name}' is ambiguous: "
                + ", ".join(str(f.relative_to(layout.root)) for f in matches)
            )


def synthesize(
    layout: ProjectLayout,
    request: BuildRequest,
    name: str,
    cxx_standard: int = policy.CXX_STANDARD,
) -> Result[tuple[Target, ...], ValidationError]:
    """Decides which targets exist for 'layout'.

    Targets come out as library, primary executable, tests, then one per
    spike directory in scan order. Either every target is returned or a
    ValidationError listing all problems.
    """
    if request.quick and not request.quick_target:
        return Failure(ValidationError(("--quick requires --target <name>",)))

    problems: list[str] = [
        f"'{n}' is not a valid target name, use letters, digits and _.+-"
        for n in (name, *(s.name for s in layout.spikes or () if s.sources))
        if not TARGET_NAME.fullmatch(n)
    ]
    targets: list[Target] = []
    features = request.features

    library: str | None = None
    include_dirs = tuple(d for d in (layout.include_dir,) if d is not None)
    if layout.library:
        library = f"{name}_lib"
        targets.append(
            _target(
                library,
                "library",
                layout.library,
                include_dirs + tuple(d for d in (layout.library_dir,) if d),
                None,
                features,
                cxx_standard,
            )
        )

    extra: tuple[str, ...] = ()
    if request.define is not None:
        try:
            extra = (policy.define_definition(request.define),)
        except ValidationError as e:
            problems.extend(e.problems)

    main_sources: tuple[Path, ...] = ()
    if request.quick:
        match quick_source(layout, request.quick_target):  # type: ignore[arg-type]
            case Success(file):
                main_sources = (file,)
            case Failure(problem):
                problems.append(problem)
    elif layout.sources:
        main_sources = layout.sources
    else:
        problems.append(f"no main sources found in '{layout.root}'")

    targets.append(
        _target(
            QUICK_TARGET if request.quick else name,
            "executable",
            main_sources,
            include_dirs,
            library,
            features,
            cxx_standard,
            extra,
        )
    )

    if layout.tests:
        targets.append(
            _target(
                f"{name}_tests",
                "test",
                layout.tests,
                include_dirs,
                library,
                features,
                cxx_standard,
            )
        )

    for spike in layout.spikes or ():
        if spike.sources:
            targets.append(
                _target(
                    SPIKE_PREFIX + spike.name,
                    "spike",
                    spike.sources,
                    include_dirs + (spike.directory,),
                    library,
                    features,
                    cxx_standard,
                )
            )

    if problems:
        return Failure(ValidationError(problems))
    return Success(tuple(targets))
