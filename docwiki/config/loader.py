"""YAML config loading with env var expansion."""

import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import DocWikiConfig

DB_PATH_ENV = "DOCWIKI_DB_PATH"


def load_config(cli_path: str | None = None) -> DocWikiConfig:
    """Load config with resolution order: CLI > project-local > user-global > defaults.

    ``DOCWIKI_DB_PATH`` overrides ``store.db_path`` whichever source wins.
    """
    config_paths = [
        Path(cli_path) if cli_path else None,
        Path("./docwiki.yaml"),
        Path.home() / ".docwiki" / "config.yaml",
    ]

    config = None
    for path in config_paths:
        if path and path.exists():
            try:
                with open(path) as f:
                    raw = yaml.safe_load(f)
                if raw is None:
                    continue
                raw = _expand_env_vars(raw)
                config = DocWikiConfig(**raw)
                break
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e
            except ValidationError as e:
                raise ValueError(f"Invalid config in {path}: {e}") from e

    if config is None:
        config = DocWikiConfig()

    db_path = os.environ.get(DB_PATH_ENV)
    if db_path:
        config.store.db_path = db_path
    return config


def _expand_env_vars(obj: object) -> object:
    """Recursively expand ${VAR} references in strings."""
    if isinstance(obj, str):
        return re.sub(r"\$\{(\w+)\}", lambda m: os.environ.get(m.group(1), ""), obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


# Default YAML template for `docwiki config init`
DEFAULT_CONFIG_TEMPLATE = """\
# docwiki.yaml

# Document conversion
conversion:
  max_file_size_mb: 10         # pre-flight ceiling, checked before reading
  fallback_to_text: false      # render unknown types as plain text instead of rejecting
  pdf:
    scale: 1.5                 # zoom factor for page rasterization
    max_pages: 25              # larger PDFs are rejected before rendering
  docx:
    enabled: true

# Document store
store:
  db_path: "wiki.db"           # overridden by $DOCWIKI_DB_PATH
  max_html_bytes: 500000
  preview_chars: 300

# Logging
log_level: "info"              # debug | info | warn | error
log_format: "text"             # text | json
"""
