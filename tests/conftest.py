"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- In-memory repository and recording email sender fakes
- Test settings pointing uploads at a temporary directory
- Test client with dependencies overridden
"""

from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.api.dependencies import get_email_sender, get_repository
from src.api.main import create_app
from src.config.settings import Settings, get_settings
from tests.fakes import ADMIN_EMAIL, InMemoryRegistrationRepository, RecordingEmailSender


@pytest.fixture
def upload_dir(tmp_path: Path) -> Path:
    return tmp_path / "uploads"


@pytest.fixture
def settings(upload_dir: Path) -> Settings:
    return Settings(
        _env_file=None,
        admin_email=ADMIN_EMAIL,
        public_base_url="",
        upload_dir=str(upload_dir),
        bcrypt_cost=4,
        max_free_chars=500,
    )


@pytest.fixture
def repository() -> InMemoryRegistrationRepository:
    return InMemoryRegistrationRepository()


@pytest.fixture
def email_sender() -> RecordingEmailSender:
    return RecordingEmailSender()


@pytest.fixture
def app(
    settings: Settings,
    repository: InMemoryRegistrationRepository,
    email_sender: RecordingEmailSender,
) -> Iterator[FastAPI]:
    """Create test FastAPI application with fakes in place of the store and SMTP."""
    test_app = create_app()
    test_app.dependency_overrides[get_settings] = lambda: settings
    test_app.dependency_overrides[get_repository] = lambda: repository
    test_app.dependency_overrides[get_email_sender] = lambda: email_sender
    yield test_app
    test_app.dependency_overrides.clear()


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Test client that does not follow redirects."""
    return TestClient(app, follow_redirects=False)
