"""Shared fixtures for ignorescan tests."""

from __future__ import annotations

from pathlib import Path

import pytest

DOCKERIGNORE_LINES = [
    "lib",
    "*.md",
    "!README.md",
    "temp?",
    "target",
    "!target/*-runner.jar",
]


def make_tree(root: Path, files: list[str]) -> Path:
    """Create *files* (slash-separated, relative to *root*) with parents.

    A trailing ``/`` creates an empty directory instead of a file.
    """
    for rel in files:
        path = root / rel
        if rel.endswith("/"):
            path.mkdir(parents=True, exist_ok=True)
        else:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(rel)
    return root


@pytest.fixture
def docker_tree(tmp_path: Path) -> Path:
    """Tree with a ``.dockerignore`` exercising exclusion and inversion.

    Structure::

        root/
        ├── .dockerignore     (lib, *.md, !README.md, temp?, target,
        │                      !target/*-runner.jar)
        ├── CHANGES.md
        ├── README.md
        ├── docs/
        │   └── notes.md
        ├── lib/
        │   └── x
        ├── pom.xml
        ├── src/main/java/One.java
        ├── src/main/resources/application.properties
        ├── target/
        │   ├── foo-runner.jar
        │   └── lib/one.jar
        ├── tempA
        └── tempABC
    """
    (tmp_path / ".dockerignore").write_text("\n".join(DOCKERIGNORE_LINES) + "\n")
    return make_tree(
        tmp_path,
        [
            "CHANGES.md",
            "README.md",
            "docs/notes.md",
            "lib/x",
            "pom.xml",
            "src/main/java/One.java",
            "src/main/resources/application.properties",
            "target/foo-runner.jar",
            "target/lib/one.jar",
            "tempA",
            "tempABC",
        ],
    )


@pytest.fixture
def star_tree(tmp_path: Path) -> Path:
    """Tree whose ignore file excludes everything and re-includes a few paths."""
    (tmp_path / ".dockerignore").write_text(
        "*\n!README.md\n!target/*-runner.jar\n!target/lib/*\n!target/quarkus-app/*\n"
    )
    return make_tree(
        tmp_path,
        [
            "Dockerfile",
            "README.md",
            "target/classes/A.class",
            "target/foo-runner.jar",
            "target/lib/one.jar",
            "target/quarkus-app/one.txt",
        ],
    )


@pytest.fixture
def noisy_tree(tmp_path: Path) -> Path:
    """Tree with default-ignored directories at several depths.

    Structure::

        root/
        ├── .git/HEAD
        ├── node_modules/pkg/index.js
        ├── src/
        │   ├── app.js
        │   └── vendor/lib.js
        └── README.md
    """
    return make_tree(
        tmp_path,
        [
            ".git/HEAD",
            "node_modules/pkg/index.js",
            "src/app.js",
            "src/vendor/lib.js",
            "README.md",
        ],
    )
