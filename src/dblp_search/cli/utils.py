"""
Shared CLI utilities.
"""

import json
from pathlib import Path
from typing import List, Optional

import click

from dblp_search.core.config import ClientConfig
from dblp_search.core.config import load_config as load_config_file
from dblp_search.core.models import Record
from dblp_search.utils.exceptions import ConfigurationError
from dblp_search.utils.logging import (
    configure_library_logging,
    level_from_verbosity,
)
from dblp_search.utils.logging import setup_logging as setup_root_logging

DEFAULT_CONFIG_FILE = Path("dblp.yml")


def load_config(config_path: Optional[Path] = None) -> ClientConfig:
    """Load configuration from file or use defaults.

    Args:
        config_path: Path to config file (YAML). If None, uses dblp.yml when present

    Returns:
        Loaded and validated ClientConfig

    Raises:
        click.ClickException: If the file is missing or invalid
    """
    if config_path is None:
        if not DEFAULT_CONFIG_FILE.exists():
            return ClientConfig()
        config_path = DEFAULT_CONFIG_FILE

    try:
        return load_config_file(config_path)
    except FileNotFoundError as e:
        raise click.ClickException(str(e))
    except ConfigurationError as e:
        raise click.ClickException(f"Configuration validation failed: {e}")


def save_records(records: List[Record], output_path: Path, format: str = "jsonl") -> None:
    """Save records to a JSON or JSONL file.

    Raises:
        click.ClickException: If the format is unknown or writing fails
    """
    if format not in ("json", "jsonl"):
        raise click.ClickException(f"Unsupported format: {format}")

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", encoding="utf-8") as f:
            if format == "jsonl":
                for record in records:
                    f.write(record.model_dump_json() + "\n")
            else:
                json.dump(
                    [record.model_dump() for record in records],
                    f,
                    indent=2,
                    ensure_ascii=False,
                )
    except OSError as e:
        raise click.ClickException(f"Error saving records: {e}")


def setup_logging(verbose: int = 0, quiet: bool = False) -> None:
    """Set up logging based on verbosity level.

    Args:
        verbose: Verbosity level (0=WARNING, 1=INFO, 2+=DEBUG)
        quiet: If True, only errors are logged
    """
    setup_root_logging(level=level_from_verbosity(verbose, quiet))
    configure_library_logging(quiet=verbose < 2)
