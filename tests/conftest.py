import logging
import sys
from pathlib import Path
from typing import Callable, Iterable

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
if SRC.exists():
    sys.path.insert(0, str(SRC))

# Register shared Hypothesis profiles for deterministic CI runs and fast local loops.
from tests.util import hypothesis_profiles  # noqa: E402,F401  pylint: disable=unused-import
from tests.util.factories import SAMPLE_LINES  # noqa: E402


@pytest.fixture(name="write_log")
def _write_log(tmp_path: Path) -> Callable[..., Path]:
    """Write incident lines to a log file under ``tmp_path``."""

    def _write(lines: Iterable[str], name: str = "incidents.csv") -> Path:
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture(name="sample_log")
def _sample_log(write_log: Callable[..., Path]) -> Path:
    return write_log(SAMPLE_LINES)


@pytest.fixture(name="propagating_logger")
def _propagating_logger(monkeypatch: pytest.MonkeyPatch) -> logging.Logger:
    """Let ``crimelog`` records reach caplog's root handler."""

    log = logging.getLogger("crimelog")
    monkeypatch.setattr(log, "propagate", True)
    return log
