from __future__ import annotations

import pytest

from helpers import TEST_API_KEY
from layerproof.config import RelaySettings


@pytest.fixture(autouse=True)
def _no_azure(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("AZURE_OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("AZURE_OPENAI_ENDPOINT", raising=False)
    monkeypatch.delenv("LAYERPROOF_ENABLE_MLFLOW", raising=False)


@pytest.fixture
def settings() -> RelaySettings:
    return RelaySettings(openai_api_key=TEST_API_KEY)
