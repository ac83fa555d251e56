from __future__ import annotations

from pathlib import Path

import pytest


class ProjectBuilder:
    """Writes small C++ project trees below a temporary directory."""

    def __init__(self, root: Path):
        self.root = root

    def file(self, relative: str, content: str = "") -> Path:
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    def dir(self, relative: str) -> Path:
        path = self.root / relative
        path.mkdir(parents=True, exist_ok=True)
        return path


@pytest.fixture
def project(tmp_path: Path) -> ProjectBuilder:
    root = tmp_path / "demo"
    root.mkdir()
    return ProjectBuilder(root)


@pytest.fixture
def full_project(project: ProjectBuilder) -> ProjectBuilder:
    project.file("include/demo/core.hpp", "#pragma once\nint answer();\n")
    project.file("lib/core.cpp", "int answer() { return 42; }\n")
    project.file("src/main.cpp", "int main() { return 0; }\n")
    project.file("src/tool.cpp", "int main() { return 1; }\n")
    project.file("tests/core_test.cpp", "int main() { return 0; }\n")
    project.file("spikes/alpha/main.cpp", "int main() { return 0; }\n")
    project.file("spikes/beta/notes.txt", "nothing to build here\n")
    return project
