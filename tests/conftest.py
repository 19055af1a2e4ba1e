from pathlib import Path
from typing import Any, Iterator

import pytest
from loguru import logger

ENV_VARS = ("ERRCHAIN_LOG_LEVEL", "ERRCHAIN_LOG_STACK", "ERRCHAIN_LOG_JSON")


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Drop ERRCHAIN_* variables and run from an empty directory (no .env)."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def log_records() -> Iterator[list[dict[str, Any]]]:
    """Collect loguru records emitted while the test runs."""
    records: list[dict[str, Any]] = []
    sink_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(sink_id)
