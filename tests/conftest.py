# =============================================================================
# Pytest Configuration and Fixtures
# =============================================================================
# Shared fixtures for the bayespam test suite.
# =============================================================================

import pytest
import tempfile
from pathlib import Path

from bayespam import Classifier


SPAM_MESSAGE = "Don't forget our special promotion: -30% on men shoes, only today!"
HAM_MESSAGE = "Hi Bob, don't forget our meeting today at 4pm."


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def xdg_dirs(temp_dir, monkeypatch):
    """Point the XDG config and data directories into a temp directory."""
    config_home = temp_dir / "config"
    data_home = temp_dir / "data"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.setenv("XDG_DATA_HOME", str(data_home))
    return {"config": config_home / "bayespam", "data": data_home / "bayespam"}


@pytest.fixture
def empty_classifier():
    """Create a classifier with an empty model."""
    return Classifier()


@pytest.fixture
def trained_classifier():
    """Create a classifier trained on one spam and one ham message."""
    classifier = Classifier()
    classifier.train_spam(SPAM_MESSAGE)
    classifier.train_ham(HAM_MESSAGE)
    return classifier


@pytest.fixture
def model_file(temp_dir, trained_classifier):
    """Save the trained classifier's model and return its path."""
    path = temp_dir / "model.json"
    trained_classifier.save(path)
    return path
