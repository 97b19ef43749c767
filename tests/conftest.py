"""
Pytest configuration and fixtures for priority desk tests
"""
from datetime import datetime, timezone

import pytest
from click.testing import CliRunner

from priority_desk.db import Store


@pytest.fixture
def store_path(tmp_path):
    """Path to a fresh SQLite store inside a temporary directory"""
    return tmp_path / "desk.db"


@pytest.fixture
def store(store_path):
    """Connected store with the schema initialized"""
    with Store(store_path) as s:
        yield s


@pytest.fixture
def fixed_now():
    return datetime(2025, 3, 14, 15, 9, 26, 535000, tzinfo=timezone.utc)


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def sample_kcs():
    """Knowledge text with three paragraphs of known sizes"""
    return "\n\n".join(
        [
            "Product information: our flagship product serves enterprise users.",
            "Technical specifications: supports concurrent users with strong uptime.",
            "Support policy: enterprise users receive priority support.",
        ]
    )
