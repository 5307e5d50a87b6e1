"""Configuration loading from YAML files."""

from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from finformatter.core.catalog import RuleCatalog
from finformatter.core.paper import Journal
from finformatter.utils.exceptions import ConfigurationError


def load_yaml(file_path: Path) -> Dict[str, Any]:
    """Load YAML file.

    Args:
        file_path: Path to YAML file

    Returns:
        Parsed YAML data

    Raises:
        ConfigurationError: If file doesn't exist or is invalid
    """
    if not file_path.exists():
        raise ConfigurationError(f"Configuration file not found: {file_path}")

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {file_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Expected a mapping at the top of {file_path}")
    return data


def save_yaml(data: Dict[str, Any], file_path: Path) -> None:
    """Save data to YAML file.

    Args:
        data: Data to save
        file_path: Path to save file

    Raises:
        ConfigurationError: If unable to save file
    """
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)

        with open(file_path, "w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, default_flow_style=False, allow_unicode=True, sort_keys=False)
    except OSError as e:
        raise ConfigurationError(f"Failed to save YAML to {file_path}: {e}") from e


def load_journals(file_path: Path) -> List[Journal]:
    """Load journal definitions from YAML.

    Expected layout::

        journals:
          - id: rfs
            name: Review of Financial Studies
            rules:
              title_limit: 15
              ...

    Args:
        file_path: Path to YAML file

    Returns:
        List of Journal objects in file order
    """
    data = load_yaml(file_path)
    journals_data = data.get("journals", [])

    if not isinstance(journals_data, list) or not journals_data:
        raise ConfigurationError(f"No journals defined in {file_path}")

    journals = []
    for journal_data in journals_data:
        try:
            journals.append(Journal(**journal_data))
        except Exception as e:
            name = journal_data.get("id", "unknown") if isinstance(journal_data, dict) else "unknown"
            raise ConfigurationError(f"Invalid journal configuration: {name}: {e}") from e

    return journals


def load_journal_catalog(file_path: Optional[Path] = None) -> RuleCatalog:
    """Build the rule catalog, from YAML when a file is given.

    Args:
        file_path: Optional custom catalog file; built-in journals otherwise.

    Returns:
        RuleCatalog
    """
    if file_path is None:
        return RuleCatalog()

    try:
        return RuleCatalog(load_journals(Path(file_path)))
    except ValueError as e:
        raise ConfigurationError(f"Invalid journal catalog {file_path}: {e}") from e
