from returns.io import IOResultE

from pybuildcxx import driver
from pybuildcxx.context import Context


def build(context: Context) -> IOResultE[int]:
    return (
        driver.load_targets(context)
        .bind(lambda targets: driver.write_build_files(context, targets))
        .bind(lambda _: driver.configure(context))
        .bind(lambda _: driver.build(context))
        .map(lambda _: 0)
    )
