"""Test configuration and fixtures for Lending Registry MCP Server.

Each test gets its own registry and configuration:
1. ``registry`` - a fresh, unshared LendingRegistry
2. ``stocked_registry`` - a registry with Dune (2 copies) and person p1
3. ``shared_registry`` - the process-wide registry the MCP handlers use,
   reset before and after the test
4. ``test_config`` - an isolated ServerConfig
"""

import os
from collections.abc import Generator
from unittest.mock import patch

import pytest

from lending_registry_mcp.config import ServerConfig, reset_config
from lending_registry_mcp.models import BookId, PersonId
from lending_registry_mcp.registry import LendingRegistry, get_registry, reset_registry

DUNE_ISBN = BookId("978-1")
PAUL = PersonId("p1")


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "mcp_tools: mark test as exercising MCP tool handlers")
    config.addinivalue_line(
        "markers", "mcp_resources: mark test as exercising MCP resource handlers"
    )


# === Registry Fixtures ===


@pytest.fixture
def registry() -> LendingRegistry:
    """Provide an empty registry."""
    return LendingRegistry()


@pytest.fixture
def stocked_registry(registry: LendingRegistry) -> LendingRegistry:
    """Provide a registry holding Dune (2 copies) and the person p1."""
    registry.add_book("Dune", "Frank Herbert", DUNE_ISBN, 2)
    registry.register_person(PAUL, "Paul Atreides")
    return registry


@pytest.fixture
def shared_registry() -> Generator[LendingRegistry, None, None]:
    """Provide the process-wide registry used by tool and resource handlers."""
    reset_registry()
    yield get_registry()
    reset_registry()


# === Configuration Fixtures ===


@pytest.fixture
def clean_env() -> Generator[None, None, None]:
    """Run the test without any LENDING_REGISTRY_ environment variables."""
    env = {k: v for k, v in os.environ.items() if not k.startswith("LENDING_REGISTRY_")}
    with patch.dict(os.environ, env, clear=True):
        yield


@pytest.fixture
def test_config(clean_env) -> Generator[ServerConfig, None, None]:
    """Provide a test-specific server configuration."""
    reset_config()

    config = ServerConfig(
        server_name="test-lending-registry",
        server_version="0.0.1-test",
        debug=True,
        log_level="DEBUG",
        seed_people=[{"id": "p1", "name": "Paul Atreides"}, {"id": "p2", "name": "Chani"}],
        _env_file=None,
    )

    yield config

    reset_config()
