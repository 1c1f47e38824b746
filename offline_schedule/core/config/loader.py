"""Configuration loading and merging utilities.

This module handles YAML file loading, environment variable expansion,
and deep merging of command-line overrides over file values.
"""

import copy
import os
import re
from pathlib import Path
from typing import Any

import yaml

from offline_schedule.core.config.models import SchedulerConfig

# Only plain environment names are expanded. Serverless variable sources such as
# ${self:custom.rate} or ${opt:stage} contain a colon and are left for the framework.
ENV_VAR_PATTERN = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")


def expand_env_vars(value: str) -> str:
    """Expand ${VAR} patterns in a string with environment variable values.

    Args:
        value: String potentially containing ${VAR_NAME} patterns.

    Returns:
        String with all ${VAR_NAME} patterns replaced by their values from os.environ.
        If a variable is not found, the pattern is left unchanged.

    Examples:
        >>> os.environ['RATE'] = 'rate(5 minutes)'
        >>> expand_env_vars('${RATE}')
        'rate(5 minutes)'
    """

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        return os.environ.get(var_name, match.group(0))

    return ENV_VAR_PATTERN.sub(replacer, value)


def expand_env_vars_recursive(obj: Any) -> Any:
    """Recursively expand environment variables in nested dicts and lists.

    Args:
        obj: Any Python object (dict, list, str, or other).

    Returns:
        Object with all string values having ${VAR} patterns expanded.
    """
    if isinstance(obj, dict):
        return {key: expand_env_vars_recursive(value) for key, value in obj.items()}
    elif isinstance(obj, list):
        return [expand_env_vars_recursive(item) for item in obj]
    elif isinstance(obj, str):
        return expand_env_vars(obj)
    else:
        return obj


def merge_configs(base_config: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Deep merge overrides over a base configuration.

    Args:
        base_config: Base configuration dictionary (file values or defaults).
        overrides: Overriding values (typically from command-line flags).

    Returns:
        Merged configuration with override values taking precedence.
        Nested dicts are merged recursively.

    Examples:
        >>> merge_configs({'invoke': {'command': ['sls'], 'timeout_seconds': 30}},
        ...               {'invoke': {'timeout_seconds': 5}})
        {'invoke': {'command': ['sls'], 'timeout_seconds': 5}}
    """
    result = copy.deepcopy(base_config)
    for key, value in overrides.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value
    return result


def check_unexpanded_vars(data: Any, source: str) -> None:
    """Recursively check for unresolved ${VAR} patterns after expansion.

    Args:
        data: Expanded configuration data (dict, list, str, or other).
        source: Human-readable label for error messages (e.g., file path).

    Raises:
        ValueError: If any ${VAR} patterns remain unresolved.
    """
    unresolved: list[str] = []
    _collect_unexpanded_vars(data, unresolved)
    if unresolved:
        unique = sorted(set(unresolved))
        raise ValueError(
            f"Unresolved environment variable(s) in {source}: {', '.join(unique)}. "
            f"Set these variables or remove the ${{VAR}} references."
        )


def _collect_unexpanded_vars(obj: Any, found: list[str]) -> None:
    """Walk data structure collecting unresolved ${VAR} patterns."""
    if isinstance(obj, dict):
        for value in obj.values():
            _collect_unexpanded_vars(value, found)
    elif isinstance(obj, list):
        for item in obj:
            _collect_unexpanded_vars(item, found)
    elif isinstance(obj, str):
        for match in ENV_VAR_PATTERN.finditer(obj):
            found.append(f"${{{match.group(1)}}}")


def load_config(path: Path | str | None = None, overrides: dict[str, Any] | None = None) -> SchedulerConfig:
    """Load scheduler configuration from a YAML file with environment variable expansion.

    Args:
        path: Path to the YAML configuration file. None means defaults only.
        overrides: Values merged over the file contents before validation.

    Returns:
        Parsed SchedulerConfig object with all ${VAR} patterns expanded.

    Raises:
        FileNotFoundError: If a config path is given but the file doesn't exist.
        yaml.YAMLError: If the YAML is malformed.
        ValueError: If a ${VAR} reference is unresolved or a value is invalid.
    """
    data: dict[str, Any] = {}
    source = "defaults"

    if path is not None:
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with config_path.open() as f:
            data = yaml.safe_load(f) or {}
        source = str(config_path)

    # Expand environment variables in all string values
    data = expand_env_vars_recursive(data)
    check_unexpanded_vars(data, source=source)

    if overrides:
        data = merge_configs(data, overrides)

    return SchedulerConfig(**data)
