"""Configuration and state management for BigQuery Data Scout."""

import json
import logging
import os
from pathlib import Path
from typing import Optional

import yaml

from src.core.source import BigQuerySource

logger = logging.getLogger(__name__)

CONFIG_FILENAMES = ("config.json", "config.yaml", "config.yml")
DEFAULT_OPERATION_TIMEOUT = 300

# Module-level state
_config: dict = {}
_source: Optional[BigQuerySource] = None


def get_config() -> dict:
    """Get config, loading if needed."""
    global _config
    if not _config:
        _config = load_config()
    return _config


def get_source() -> BigQuerySource:
    """Get the BigQuery source, building it from config if needed."""
    global _source
    if _source is None:
        config = get_config()
        _source = BigQuerySource(
            project=config["project"],
            location=config.get("location") or None,
            use_client_authorization=bool(config.get("use_client_oauth", False)),
            operation_timeout=float(
                config.get("operation_timeout", DEFAULT_OPERATION_TIMEOUT)
            ),
        )
        logger.info(
            f"Using BigQuery project {_source.bigquery_project()} "
            f"(client OAuth: {_source.use_client_authorization()})"
        )
    return _source


def reset_config():
    """Drop cached config and source so the next call reloads them."""
    global _config, _source
    _config = {}
    _source = None


def _candidate_paths() -> list:
    paths = []
    env_path = os.environ.get("BIGQUERY_SCOUT_CONFIG")
    if env_path:
        explicit = Path(env_path)
        if not explicit.exists():
            raise ValueError(f"BIGQUERY_SCOUT_CONFIG points to a missing file: {explicit}")
        paths.append(explicit)

    config_dir = Path.home() / ".config" / "bigquery-scout"
    paths.extend(config_dir / name for name in CONFIG_FILENAMES)
    paths.extend(Path(name) for name in CONFIG_FILENAMES)
    return paths


def _read_config_file(path: Path) -> dict:
    with open(path, "r") as f:
        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(f)
        else:
            data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Configuration in {path} must be a mapping")
    return data


def load_config() -> dict:
    """Load configuration from config.json/config.yaml or environment."""
    config = None
    for path in _candidate_paths():
        if path.exists():
            logger.info(f"Loading configuration from {path}")
            config = _read_config_file(path)
            break

    if config is None:
        config = {}

    if not config.get("project"):
        env_project = os.environ.get("GOOGLE_CLOUD_PROJECT")
        if env_project:
            config["project"] = env_project

    # No default project - user must configure
    if not config.get("project"):
        raise ValueError(
            "Configuration not found. Please create config.json with:\n"
            "{\n"
            '  "project": "my-gcp-project",\n'
            '  "location": "us-central1",\n'
            '  "use_client_oauth": false\n'
            "}\n"
            "or set GOOGLE_CLOUD_PROJECT."
        )

    return config
