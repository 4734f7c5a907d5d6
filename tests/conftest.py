"""Test configuration and fixtures for lstree."""

import os

import pytest


def pytest_addoption(parser):
    """Add custom command-line options for tests."""
    parser.addoption("--run-cli-tests", action="store_true", default=False, help="Run CLI integration tests (slow)")


@pytest.fixture
def project_tree(tmp_path):
    """Create a small project directory.

    Layout::

        project/
        ├── .hidden.txt
        ├── README.md          (10 bytes)
        ├── docs/
        │   ├── guide.txt      (2048 bytes)
        │   └── notes.md       (5 bytes)
        ├── empty/
        ├── setup.py           (20 bytes)
        └── src/
            ├── app.py         (30 bytes)
            ├── lib/
            │   ├── report.txt (100 bytes)
            │   └── util.py    (40 bytes)
            └── run.sh         (12 bytes, mode 755)
    """
    root = tmp_path / "project"
    root.mkdir()
    (root / ".hidden.txt").write_text("secret")
    (root / "README.md").write_text("x" * 10)
    (root / "docs").mkdir()
    (root / "docs" / "guide.txt").write_text("g" * 2048)
    (root / "docs" / "notes.md").write_text("n" * 5)
    (root / "empty").mkdir()
    (root / "setup.py").write_text("s" * 20)
    (root / "src").mkdir()
    (root / "src" / "app.py").write_text("a" * 30)
    (root / "src" / "lib").mkdir()
    (root / "src" / "lib" / "report.txt").write_text("r" * 100)
    (root / "src" / "lib" / "util.py").write_text("u" * 40)
    run_sh = root / "src" / "run.sh"
    run_sh.write_text("#!/bin/sh\n:\n")
    run_sh.chmod(0o755)
    for path in root.rglob("*"):
        if path.is_file() and path != run_sh:
            path.chmod(0o644)
    return root


@pytest.fixture
def symlink_tree(project_tree):
    """Add symlinks to the project tree, or skip if the platform cannot create them."""
    try:
        os.symlink("README.md", project_tree / "readme_link")
        os.symlink(project_tree / "src", project_tree / "docs" / "src_link")
        os.symlink(project_tree / "src", project_tree / "src" / "lib" / "loop")
        os.symlink("missing.txt", project_tree / "dangling")
    except (OSError, NotImplementedError):
        pytest.skip("Symlink creation not supported on this platform/environment")
    return project_tree
