from __future__ import annotations

import sys
from pathlib import Path

import pytest


_REPO_ROOT = Path(__file__).resolve().parents[1]
_SRC = _REPO_ROOT / "src"
if _SRC.exists():
    sys.path.insert(0, str(_SRC))

from form_schema_engine.ids import SequentialIds  # noqa: E402


@pytest.fixture
def ids() -> SequentialIds:
    return SequentialIds()


@pytest.fixture(autouse=True)
def _clean_engine_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "FORM_ENGINE_DEFAULT_LOCALE",
        "FORM_ENGINE_STRICT_IMPORT",
        "FORM_ENGINE_HTTP_LOG",
        "FORM_ENGINE_HTTP_LOG_HEADERS",
        "FORM_ENGINE_HTTP_LOG_BODY_MAX_BYTES",
    ):
        monkeypatch.delenv(name, raising=False)
