from collections.abc import Iterable
from pathlib import Path

from pybuildcxx.targets import BuildRequest, Target, QUICK_TARGET
from pybuildcxx.types import Cmd

MIN_CMAKE = "3.16"
GENERATED_DIR = "generated"

OUTPUT_DIRECTORIES = {
    "CMAKE_RUNTIME_OUTPUT_DIRECTORY": "bin",
    "CMAKE_LIBRARY_OUTPUT_DIRECTORY": "lib",
    "CMAKE_ARCHIVE_OUTPUT_DIRECTORY": "lib",
}
CONFIGURATIONS = ("DEBUG", "RELEASE", "RELWITHDEBINFO", "MINSIZEREL")


def _cmake_path(path: Path) -> str:
    return f'"{path.absolute().as_posix()}"'


def _block(lines: list[str], head: str, entries: Iterable[str]) -> None:
    entries = tuple(entries)
    if not entries:
        return
    lines.append(head)
    lines.extend(f"  {entry}" for entry in entries)
    lines.append(")")


def _render_target(target: Target) -> list[str]:
    lines: list[str] = []
    if target.kind == "library":
        _block(lines, f"add_library({target.name} STATIC", map(_cmake_path, target.sources))
    else:
        _block(lines, f"add_executable({target.name}", map(_cmake_path, target.sources))
    _block(
        lines,
        f"target_include_directories({target.name} PUBLIC"
        if target.kind == "library"
        else f"target_include_directories({target.name} PRIVATE",
        map(_cmake_path, target.include_dirs),
    )
    _block(
        lines,
        f"target_compile_definitions({target.name} PRIVATE",
        target.definitions,
    )
    lines.append(
        f"target_compile_features({target.name} PRIVATE cxx_std_{target.cxx_standard})"
    )
    lines.append(
        f"set_target_properties({target.name} PROPERTIES CXX_EXTENSIONS OFF)"
    )
    _block(
        lines,
        f"target_compile_options({target.name} PRIVATE",
        (
            *(
                (f"\"$<$<CXX_COMPILER_ID:MSVC>:{';'.join(target.msvc_warnings)}>\"",)
                if target.msvc_warnings
                else ()
            ),
            f"\"$<$<NOT:$<CXX_COMPILER_ID:MSVC>>:{';'.join(target.warnings)}>\"",
        ),
    )
    if target.depends:
        lines.append(f"target_link_libraries({target.name} PRIVATE {target.depends})")
    lines.append("")
    return lines


def render_cmakelists(name: str, output: Path, targets: Iterable[Target]) -> str:
    """Renders the targets into a CMakeLists.txt. Same input, same text."""
    lines = [
        "# Generated by pybuildcxx, changes are overwritten on every build.",
        f"cmake_minimum_required(VERSION {MIN_CMAKE})",
        f"project({name} LANGUAGES CXX)",
        "",
    ]
    for variable, subdir in OUTPUT_DIRECTORIES.items():
        directory = _cmake_path(output / subdir)
        lines.append(f"set({variable} {directory})")
        lines.extend(f"set({variable}_{c} {directory})" for c in CONFIGURATIONS)
    lines.append("")

    for target in targets:
        lines.extend(_render_target(target))
    return "\n".join(lines)


def write_cmakelists(name: str, output: Path, targets: Iterable[Target]) -> Path:
    cmakelists = output / GENERATED_DIR / "CMakeLists.txt"
    cmakelists.parent.mkdir(parents=True, exist_ok=True)
    cmakelists.write_text(render_cmakelists(name, output, targets))
    return cmakelists


def configure_command(
    output: Path, request: BuildRequest, generator: str | None = None
) -> Cmd:
    return (
        "cmake",
        "-S",
        str(output / GENERATED_DIR),
        "-B",
        str(output),
        *(("-G", generator) if generator else ()),
        f"-DCMAKE_BUILD_TYPE={request.build_type}",
        "-DCMAKE_EXPORT_COMPILE_COMMANDS=ON",
    )


def build_command(output: Path, request: BuildRequest) -> Cmd:
    return (
        "cmake",
        "--build",
        str(output),
        # multi-config generators ignore CMAKE_BUILD_TYPE
        "--config",
        request.build_type,
        *(("--target", QUICK_TARGET) if request.quick else ()),
    )
