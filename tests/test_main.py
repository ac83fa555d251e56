"""End to end tests through the command line entry points."""

from __future__ import annotations

import platform
import subprocess
from pathlib import Path

import pytest

from pybuildcxx import driver
from pybuildcxx.main import pybuildcxx


class FakeCMake:
    """Stands in for subprocess.run inside the driver and records every call."""

    def __init__(self, returncodes=(0, 0), stdout="", stderr=""):
        self.returncodes = list(returncodes)
        self.stdout = stdout
        self.stderr = stderr
        self.calls: list[tuple[str, ...]] = []

    def __call__(self, cmd, **kwargs):
        assert kwargs.get("capture_output") is True
        self.calls.append(tuple(cmd))
        return subprocess.CompletedProcess(
            cmd, self.returncodes.pop(0), self.stdout, self.stderr
        )


@pytest.fixture
def fake_cmake(monkeypatch):
    def install(**kwargs) -> FakeCMake:
        fake = FakeCMake(**kwargs)
        monkeypatch.setattr(driver.subprocess, "run", fake)
        return fake

    return install


def _cli(project, *argv: str) -> int:
    return pybuildcxx(["-d", str(project.root), *argv])


def test_build_runs_one_configure_and_one_build(full_project, fake_cmake) -> None:
    fake = fake_cmake()

    assert _cli(full_project, "build") == 0

    output = full_project.root / "build"
    assert [call[:2] for call in fake.calls] == [("cmake", "-S"), ("cmake", "--build")]
    assert "-DCMAKE_BUILD_TYPE=Release" in fake.calls[0]
    cmakelists = (output / "generated" / "CMakeLists.txt").read_text()
    assert "add_library(demo_lib STATIC" in cmakelists
    assert "add_executable(spike_alpha" in cmakelists
    assert "spike_beta" not in cmakelists


def test_build_twice_is_idempotent(full_project, fake_cmake) -> None:
    fake_cmake(returncodes=(0, 0, 0, 0))

    assert _cli(full_project, "build") == 0
    assert _cli(full_project, "build") == 0


def test_build_modes_are_additive(full_project, fake_cmake) -> None:
    fake = fake_cmake()

    code = _cli(
        full_project, "build", "--quick", "--target", "tool", "--debug", "--feature", "feature"
    )

    assert code == 0
    assert "-DCMAKE_BUILD_TYPE=Debug" in fake.calls[0]
    assert fake.calls[1][-2:] == ("--target", "quick_spike")
    cmakelists = (full_project.root / "build/generated/CMakeLists.txt").read_text()
    assert "add_executable(quick_spike" in cmakelists
    assert "ENABLE_FEATURE" in cmakelists


def test_quick_without_target_exits_1_without_cmake(full_project, fake_cmake, capsys) -> None:
    fake = fake_cmake()

    assert _cli(full_project, "build", "--quick") == 1
    assert fake.calls == []
    assert "--quick requires --target" in capsys.readouterr().err


def test_quick_with_unknown_target_exits_1(full_project, fake_cmake) -> None:
    fake = fake_cmake()

    assert _cli(full_project, "build", "--quick", "--target", "missing") == 1
    assert fake.calls == []


def test_configure_failure_stops_before_build(full_project, fake_cmake, capsys) -> None:
    fake = fake_cmake(returncodes=(3,), stderr="CMake Error: broken\n")

    assert _cli(full_project, "build") == 3

    assert len(fake.calls) == 1
    err = capsys.readouterr().err
    assert "CMake Error: broken" in err
    assert "Error (configuring)" in err


def test_build_failure_exit_status_is_propagated(full_project, fake_cmake) -> None:
    fake = fake_cmake(returncodes=(0, 2))

    assert _cli(full_project, "build") == 2
    assert len(fake.calls) == 2


def test_missing_cmake_exits_127(full_project, monkeypatch) -> None:
    def not_found(cmd, **kwargs):
        raise FileNotFoundError(cmd[0])

    monkeypatch.setattr(driver.subprocess, "run", not_found)

    assert _cli(full_project, "build") == 127


def test_build_dir_option(full_project, fake_cmake, tmp_path) -> None:
    fake = fake_cmake()
    output = tmp_path / "elsewhere"

    assert _cli(full_project, "build", "-bd", str(output)) == 0
    assert fake.calls[0][4] == str(output)
    assert (output / "generated" / "CMakeLists.txt").exists()


def test_clean_twice_succeeds(full_project) -> None:
    (full_project.root / "build" / "bin").mkdir(parents=True)

    assert _cli(full_project, "clean") == 0
    assert not (full_project.root / "build").exists()
    assert _cli(full_project, "clean") == 0


def test_clean_refuses_to_remove_the_project(full_project) -> None:
    assert _cli(full_project, "clean", "-bd", str(full_project.root)) == 1
    assert (full_project.root / "src" / "main.cpp").exists()


def test_run_missing_artifact_exits_1(full_project, capsys) -> None:
    assert _cli(full_project, "run", "--target", "X") == 1
    assert "did you build it?" in capsys.readouterr().err


@pytest.mark.skipif(platform.system() == "Windows", reason="shell script artifacts")
def test_run_propagates_the_artifact_status(full_project) -> None:
    for name, status in (("X", 7), ("demo", 0), ("quick_spike", 5)):
        exe = full_project.root / "build" / "bin" / name
        exe.parent.mkdir(parents=True, exist_ok=True)
        exe.write_text(f"#!/bin/sh\nexit {status}\n")
        exe.chmod(0o755)

    assert _cli(full_project, "run", "--target", "X") == 7
    assert _cli(full_project, "run") == 0
    assert _cli(full_project, "run", "--quick") == 5


def test_targets_lists_without_running_cmake(full_project, fake_cmake, capsys) -> None:
    fake = fake_cmake()

    assert _cli(full_project, "targets") == 0

    out = capsys.readouterr().out
    assert fake.calls == []
    assert out.index("demo_lib (library)") < out.index("demo (executable)")
    assert "spike_alpha (spike)" in out


def test_bad_config_exits_2(full_project, capsys) -> None:
    full_project.file("pybuildcxx.toml", "[project]\ncxx_standard = 'x'\n")

    assert _cli(full_project, "build") == 2
    assert "Error (config)" in capsys.readouterr().err


def test_global_options_after_subcommand(full_project, fake_cmake) -> None:
    fake_cmake()

    assert pybuildcxx(["build", "-d", str(full_project.root)]) == 0
    assert (full_project.root / "build" / "generated" / "CMakeLists.txt").exists()


@pytest.mark.skipif(platform.system() == "Windows", reason="posix permissions")
def test_run_non_executable_artifact_reports_one_line(full_project, capsys) -> None:
    exe = full_project.root / "build" / "bin" / "X"
    exe.parent.mkdir(parents=True)
    exe.write_text("#!/bin/sh\nexit 0\n")
    exe.chmod(0o644)

    assert _cli(full_project, "run", "--target", "X") == 126
    err = capsys.readouterr().err
    assert err.startswith("[pybuildcxx] Error (run): cannot execute")
    assert len(err.strip().splitlines()) == 1


def test_clean_ignores_a_malformed_config(full_project) -> None:
    full_project.file("pybuildcxx.toml", "[project\n")
    (full_project.root / "build" / "bin").mkdir(parents=True)

    assert _cli(full_project, "clean") == 0
    assert not (full_project.root / "build").exists()


def test_clean_keeps_the_configured_build_dir_of_a_badly_typed_config(full_project) -> None:
    full_project.file(
        "pybuildcxx.toml", '[project]\nbuild_dir = "out"\ncxx_standard = "x"\n'
    )
    (full_project.root / "out").mkdir()
    (full_project.root / "build").mkdir()

    assert _cli(full_project, "clean") == 0
    assert not (full_project.root / "out").exists()
    assert (full_project.root / "build").exists()


def test_build_in_directory_with_space_is_a_validation_error(tmp_path, fake_cmake, capsys) -> None:
    root = tmp_path / "my app"
    (root / "src").mkdir(parents=True)
    (root / "src" / "main.cpp").write_text("int main() { return 0; }\n")
    fake = fake_cmake()

    assert pybuildcxx(["-d", str(root), "build"]) == 1
    assert fake.calls == []
    assert not (root / "build").exists()
    assert "'my app' is not a valid target name" in capsys.readouterr().err
