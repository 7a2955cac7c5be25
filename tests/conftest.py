"""Shared test configuration and fixtures."""

from pathlib import Path

import pytest
from dotenv import load_dotenv

from immutable_table.config import reset_settings

# Load .env from project root for all tests
root = Path(__file__).parent.parent.resolve()
load_dotenv(root / ".env")


@pytest.fixture(autouse=True)
def fresh_settings():
    """Make every test read settings from the environment it sets up."""
    reset_settings()
    yield
    reset_settings()
