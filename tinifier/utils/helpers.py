"""Helper utilities

Functions:
    resolve_author() -> str
        Resolve the identity recorded as author of new entries
    load_yaml(path: Path) -> dict
        Load a YAML file into a Python dictionary
"""

import os
from pathlib import Path
from typing import Any

import yaml

from tinifier.constants import DEFAULT_AUTHOR, ENV


def resolve_author() -> str:
    """Resolve the current user's identity from the environment

    Returns:
        str: Value of `USER`, or 'SYSTEM' when unset or empty.

    Example:
        >>> os.environ['USER'] = 'alice'
        >>> resolve_author()
        'alice'
    """
    return os.environ.get(ENV.App.USER) or DEFAULT_AUTHOR


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file into a Python dictionary.

    Args:
        path (Path):
            Path to a YAML file.

    Returns:
        dict[str, Any]:
            Parsed YAML document. Returns {} for empty files.

    Raises:
        FileNotFoundError:
            If the file does not exist.
        yaml.YAMLError:
            If the file is not valid YAML.
    """
    if not path.is_file():
        raise FileNotFoundError(f'YAML not found: {path}')
    with path.open('r', encoding='utf-8') as f:
        data = yaml.safe_load(f)
    return data or {}
