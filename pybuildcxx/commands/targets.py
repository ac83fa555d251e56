from returns.io import IOResultE

from pybuildcxx.context import Context
from pybuildcxx.driver import load_targets
from pybuildcxx.targets import Target


def describe(context: Context, target: Target) -> str:
    lines = [f"{target.name} ({target.kind})"]
    if target.depends:
        lines.append(f"  depends: {target.depends}")
    if target.definitions:
        lines.append(f"  definitions: {' '.join(target.definitions)}")
    lines.append(f"  standard: c++{target.cxx_standard}")
    lines.extend(
        f"  {source.relative_to(context.project)}" for source in target.sources
    )
    return "\n".join(lines)


def targets(context: Context) -> IOResultE[int]:
    def show(found: tuple[Target, ...]) -> int:
        for target in found:
            print(describe(context, target))
        return 0

    return load_targets(context).map(show)
