from __future__ import annotations

from pathlib import Path

import pytest

SAMPLES_DIR = Path(__file__).resolve().parents[1] / "samples"


@pytest.fixture()
def samples_dir() -> Path:
    return SAMPLES_DIR


@pytest.fixture()
def read_sample():
    def _read(name: str) -> str:
        return (SAMPLES_DIR / name).read_text(encoding="utf-8")

    return _read
