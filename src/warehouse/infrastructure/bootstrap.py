"""Composition root: wires configuration, logging and the domain together.

This is the only module that reads the environment.  Everything in the
domain layer receives its collaborators explicitly.

Environment variables:
- ``WAREHOUSE_NAME``: default name for new warehouses
- ``WAREHOUSE_LOG_LEVEL``: minimum structlog level (default ``WARNING``)
"""

from __future__ import annotations

import logging
import os

import structlog

from warehouse.domain.exceptions import InvalidArgumentError
from warehouse.domain.model.category import CategoryRegistry
from warehouse.domain.model.warehouse import DEFAULT_NAME, Warehouse

NAME_ENV_VAR = "WAREHOUSE_NAME"
LOG_LEVEL_ENV_VAR = "WAREHOUSE_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"

_shared_registry: CategoryRegistry | None = None


def configure_logging(level: str | None = None) -> int:
    """Configure structlog for console output and return the numeric level."""
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL)

    numeric_level = logging.getLevelNamesMapping().get(level.upper())
    if numeric_level is None:
        raise InvalidArgumentError(f"Unknown log level: {level!r}")

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
    )
    return numeric_level


def default_warehouse_name() -> str:
    return os.environ.get(NAME_ENV_VAR) or DEFAULT_NAME


def new_warehouse(
    name: str | None = None,
    categories: CategoryRegistry | None = None,
) -> Warehouse:
    """Build a warehouse, falling back to the configured default name."""
    return Warehouse.get_instance(name or default_warehouse_name(), categories)


def shared_category_registry() -> CategoryRegistry:
    """Registry for callers that want warehouses to share categories."""
    global _shared_registry
    if _shared_registry is None:
        _shared_registry = CategoryRegistry()
    return _shared_registry


def reset_shared_category_registry() -> None:
    global _shared_registry
    _shared_registry = None
