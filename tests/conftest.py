"""
Pytest configuration and fixtures for the task board tests.
"""

from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient

from backend.core.config import Settings
from backend.core.container import Container, clear_container_cache
from backend.main import create_app
from backend.models.profile import Identity
from backend.providers.factory import ProviderBundle
from backend.providers.identity import InMemoryIdentityProvider
from backend.providers.store import InMemoryTaskStore


@pytest.fixture(autouse=True)
def clear_caches() -> Generator[None, None, None]:
    """
    Clear all caches before and after each test.

    This ensures test isolation by resetting singleton state.
    """
    clear_container_cache()
    yield
    clear_container_cache()


@pytest.fixture
def temp_config_file(tmp_path: Path) -> Path:
    """
    Create a temporary config.yaml file for testing.

    Args:
        tmp_path: Pytest tmp_path fixture.

    Returns:
        Path to the temporary config file.
    """
    config_content = """
log_level: DEBUG
mount_dashboard: false

storage:
  provider: "memory"
  tasks_table: "tasks"
  request_timeout_seconds: 5

cors:
  allow_origins:
    - "http://localhost:5173"
"""
    config_path = tmp_path / "config.yaml"
    config_path.write_text(config_content)
    return config_path


@pytest.fixture
def test_settings(temp_config_file: Path) -> Settings:
    """
    Create test settings from temporary config file.

    Args:
        temp_config_file: Path to temporary config file.

    Returns:
        Settings instance loaded from temporary config.
    """
    return Settings.from_yaml(temp_config_file)


@pytest.fixture
def identity_provider() -> InMemoryIdentityProvider:
    """In-memory identity provider with the administrative capability."""
    return InMemoryIdentityProvider(admin_enabled=True)


@pytest.fixture
def task_store() -> InMemoryTaskStore:
    """Empty in-memory task store."""
    return InMemoryTaskStore()


@pytest.fixture
def test_container(
    test_settings: Settings,
    identity_provider: InMemoryIdentityProvider,
    task_store: InMemoryTaskStore,
) -> Container:
    """
    Create a test container around the in-memory providers.

    Args:
        test_settings: Test settings fixture.
        identity_provider: Identity provider fixture.
        task_store: Task store fixture.

    Returns:
        Container instance with test settings and fakes.
    """
    return Container(
        settings=test_settings,
        providers=ProviderBundle(identity=identity_provider, store=task_store),
    )


@pytest.fixture
def user(identity_provider: InMemoryIdentityProvider) -> Identity:
    """A registered user holding token 'token-ada'."""
    return identity_provider.register(
        "ada@example.com",
        token="token-ada",
        metadata={"full_name": "Ada Lovelace"},
    )


@pytest.fixture
def other_user(identity_provider: InMemoryIdentityProvider) -> Identity:
    """A second registered user holding token 'token-grace'."""
    return identity_provider.register("grace@example.com", token="token-grace")


@pytest.fixture
def auth_headers(user: Identity) -> dict[str, str]:
    return {"Authorization": "Bearer token-ada"}


@pytest.fixture
def other_headers(other_user: Identity) -> dict[str, str]:
    return {"Authorization": "Bearer token-grace"}


@pytest.fixture
def client(test_container: Container) -> Generator[TestClient, None, None]:
    """
    Create a test client for an application built around the test container.

    Yields:
        TestClient instance.
    """
    with TestClient(create_app(test_container)) as test_client:
        yield test_client
