"""Load policy tables and route catalogs from configuration files."""

from pathlib import Path
from typing import Iterable, Optional, Union

from ..common.config import load_config, load_document
from ..common.logger import get_logger
from .catalog import RouteCatalog
from .exceptions import ConfigurationError
from .policy import PolicyTable, parse_policy_table

logger = get_logger("careguard.loader")


def load_policy_table(
    path: Union[str, Path],
    allowed_actions: Optional[Iterable[str]] = None,
) -> PolicyTable:
    """Load and validate a policy table file.

    Args:
        path: YAML or JSON file mapping role names to grants
        allowed_actions: Optional closed set of valid actions

    Returns:
        PolicyTable instance

    Raises:
        FileNotFoundError: If the file doesn't exist
        ConfigurationError: If the file or the table is malformed
    """
    table = parse_policy_table(load_config(path), allowed_actions=allowed_actions)
    logger.info(f"Loaded policy table from {path} ({len(table)} roles)")
    return table


def load_route_catalog(path: Union[str, Path]) -> RouteCatalog:
    """Load a route catalog file.

    The file holds either a list of route entries or a mapping with a
    ``routes`` list::

        routes:
          - {path: /, module: dashboard, label: Dashboard, icon: LayoutDashboard}
          - {path: /patients, module: patients, label: Patients, icon: Users}
    """
    document = load_document(path)
    if isinstance(document, dict):
        document = document.get("routes")
    if not isinstance(document, list):
        raise ConfigurationError(
            f"Route catalog {path} must be a list of routes or a mapping with a 'routes' list"
        )

    catalog = RouteCatalog(document)
    logger.info(f"Loaded route catalog from {path} ({len(catalog)} routes)")
    return catalog
