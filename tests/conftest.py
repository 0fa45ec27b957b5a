import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from projkit.config import ProjectLayout  # noqa: E402
from projkit.session import Session  # noqa: E402


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """An empty project root with no ``lib`` or ``cache`` directory yet."""

    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def session(project: Path) -> Session:
    return Session(layout=ProjectLayout(root=project))


def write_lib(root: Path, name: str, source: str) -> Path:
    lib = root / "lib"
    lib.mkdir(exist_ok=True)
    path = lib / f"{name}.py"
    path.write_text(source)
    return path


@pytest.fixture
def lib_writer(project: Path):
    return lambda name, source: write_lib(project, name, source)


@pytest.fixture
def events(caplog):
    """Return the structured payloads logged by projkit so far."""

    caplog.set_level("DEBUG", logger="projkit")

    def _collect() -> list[dict]:
        return [
            record.structured
            for record in caplog.records
            if record.name.startswith("projkit") and hasattr(record, "structured")
        ]

    return _collect
