"""Test configuration and fixtures for projexport."""

import pytest

from projexport.config import ExporterConfig
from projexport.session import ExportSession


@pytest.fixture
def sample_project(tmp_path):
    """Create a small project with an excluded dependency folder.

    proj/
    ├── README.md            (7 bytes)
    ├── node_modules/pkg/index.js
    └── src/a.js             (1 byte, "x")
    """
    root = tmp_path / "proj"
    (root / "src").mkdir(parents=True)
    (root / "src" / "a.js").write_bytes(b"x")
    (root / "node_modules" / "pkg").mkdir(parents=True)
    (root / "node_modules" / "pkg" / "index.js").write_bytes(b"module.exports = 1;\n")
    (root / "README.md").write_bytes(b"# Demo\n")
    return root


@pytest.fixture
def output_dir(tmp_path):
    return tmp_path / "exports"


@pytest.fixture
def session(output_dir):
    return ExportSession(ExporterConfig(output_dir=output_dir))


@pytest.fixture
def loaded_session(session, sample_project):
    session.load(sample_project, ["node_modules"])
    return session
