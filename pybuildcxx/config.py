from pathlib import Path
from typing import Any, TypedDict

import toml

from returns.io import IOFailure, IOResultE, IOSuccess

from pybuildcxx.errors import ConfigError
from pybuildcxx.policy import CXX_STANDARD

CONFIG_FILE = "pybuildcxx.toml"


class ProjectConfig(TypedDict):
    name: str
    cxx_standard: int
    build_dir: str
    generator: str | None


class LayoutConfig(TypedDict):
    include: str
    src: str
    lib: str
    tests: str
    spikes: str


class Config(TypedDict):
    project: ProjectConfig
    layout: LayoutConfig
    features: dict[str, bool]


DEFAULT_LAYOUT = LayoutConfig(
    include="include",
    src="src",
    lib="lib",
    tests="tests",
    spikes="spikes",
)


def _expect(config_file: Path, value: Any, kind: type, key: str) -> Any:
    # bool is a subclass of int, so it has to be excluded explicitly
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise ConfigError(
            config_file, f"'{key}' must be of type {kind.__name__}, got {value!r}"
        )
    return value


def create_config(project_dir: Path, config_file: Path, raw: dict[str, Any]) -> Config:
    project = raw.get("project", {})
    layout = raw.get("layout", {})
    features = raw.get("features", {})
    for table, value in (("project", project), ("layout", layout), ("features", features)):
        _expect(config_file, value, dict, table)

    generator = project.get("generator")
    if generator is not None:
        _expect(config_file, generator, str, "project.generator")

    return Config(
        project=ProjectConfig(
            name=_expect(
                config_file,
                project.get("name", project_dir.resolve().name),
                str,
                "project.name",
            ),
            cxx_standard=_expect(
                config_file,
                project.get("cxx_standard", CXX_STANDARD),
                int,
                "project.cxx_standard",
            ),
            build_dir=_expect(
                config_file, project.get("build_dir", "build"), str, "project.build_dir"
            ),
            generator=generator,
        ),
        layout=LayoutConfig(
            **{
                role: _expect(
                    config_file, layout.get(role, default), str, f"layout.{role}"
                )
                for role, default in DEFAULT_LAYOUT.items()
            }  # type: ignore
        ),
        features={
            name: _expect(config_file, enabled, bool, f"features.{name}")
            for name, enabled in features.items()
        },
    )


def config_load(project_dir: Path) -> IOResultE[Config]:
    """Loads 'pybuildcxx.toml' from the project directory. A missing file yields the defaults."""
    config_file = project_dir / CONFIG_FILE
    try:
        raw = toml.loads(config_file.read_text()) if config_file.exists() else {}
        return IOSuccess(create_config(project_dir, config_file, raw))
    except toml.TomlDecodeError as e:
        return IOFailure(ConfigError(config_file, str(e)))
    except OSError as e:
        return IOFailure(ConfigError(config_file, e.strerror or str(e)))
    except ConfigError as e:
        return IOFailure(e)


def fallback_config(project_dir: Path) -> Config:
    """Defaults, keeping 'project.build_dir' as long as it can still be read."""
    config_file = project_dir / CONFIG_FILE
    config = create_config(project_dir, config_file, {})
    try:
        build_dir = toml.loads(config_file.read_text())["project"]["build_dir"]
    except (OSError, toml.TomlDecodeError, KeyError, TypeError):
        return config
    if isinstance(build_dir, str):
        config["project"]["build_dir"] = build_dir
    return config
