import logging
from pathlib import Path

import pytest
import structlog

from entity_fixtures import ENVIRONMENT_ENTITY, TREE_ENTITY, USER_ENTITY, USER_ENTITY_WITH_GAP
from verdantic import VersionedEntity


@pytest.fixture
def environment_entity() -> VersionedEntity:
    """Two-version entity whose v2 adds a masked flag to each variable."""
    return ENVIRONMENT_ENTITY


@pytest.fixture
def user_entity() -> VersionedEntity:
    """Three-version entity built from pydantic models."""
    return USER_ENTITY


@pytest.fixture
def user_entity_with_gap() -> VersionedEntity:
    """User entity whose version map lacks version 2."""
    return USER_ENTITY_WITH_GAP


@pytest.fixture
def tree_entity() -> VersionedEntity:
    """Self-referential tree entity."""
    return TREE_ENTITY


@pytest.fixture
def v1_environment() -> dict:
    """Environment document at version 1."""
    return {"v": 1, "name": "x", "variables": [{"name": "a", "value": "b"}]}


@pytest.fixture
def v2_environment() -> dict:
    """Environment document at version 2."""
    return {
        "v": 2,
        "name": "x",
        "variables": [
            {"name": "a", "value": "b", "masked": False},
            {"name": "token", "masked": True},
        ],
    }


@pytest.fixture
def v1_tree() -> dict:
    """Nested tree document at version 1."""
    return {
        "v": 1,
        "name": "root",
        "children": [
            {"v": 1, "name": "child1", "children": []},
            {
                "v": 1,
                "name": "child2",
                "children": [{"v": 1, "name": "grandchild", "children": []}],
            },
        ],
    }


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    """Path to a (not yet written) verdantic.yaml in a temporary directory."""
    return tmp_path / "verdantic.yaml"


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo structlog and root logger changes made by the CLI."""
    root_logger = logging.getLogger()
    level = root_logger.level
    yield
    structlog.reset_defaults()
    for handler in root_logger.handlers[:]:
        if isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter):
            root_logger.removeHandler(handler)
    root_logger.setLevel(level)
