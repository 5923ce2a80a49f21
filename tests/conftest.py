# tests/conftest.py
import pytest

import inference.verifier as verifier_module
from inference.config import CONFIG_ENV_VAR, VerifierConfig
from inference.verifier import RuleVerifier


@pytest.fixture(autouse=True)
def isolated_default_verifier(monkeypatch):
    """Each test builds its own process-wide verifier from a clean environment."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.setattr(verifier_module, "_default_verifier", None)


@pytest.fixture
def verifier() -> RuleVerifier:
    return RuleVerifier(VerifierConfig())
