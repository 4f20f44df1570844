"""
YAML configuration loader for Intune.

Loads YAML files and validates them against the Pydantic schemas in
``intune.config.schema``. Supports ``${name}`` placeholders resolved from
runtime parameters or environment variables.
"""

import os
import re
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from .schema import IntuneConfig


def substitute_params(obj: Any, params: Dict[str, Any]) -> Any:
    """
    Recursively substitute ${param} placeholders with actual values.

    Runtime params take priority over environment variables.

    Args:
        obj: Configuration object (dict, list, str, or scalar)
        params: Dictionary of parameter name -> value mappings

    Returns:
        Configuration object with substitutions applied

    Raises:
        ValueError: If a placeholder is found in neither source

    Example:
        >>> substitute_params({"database": {"band_count": "${bands}"}}, {"bands": 128})
        {'database': {'band_count': 128}}
    """
    if isinstance(obj, str):
        match = re.fullmatch(r'\$\{(\w+)\}', obj)
        if match:
            param_name = match.group(1)

            if param_name in params:
                return params[param_name]

            env_value = os.getenv(param_name)
            if env_value is not None:
                return env_value

            raise ValueError(
                f"Missing parameter: {param_name}. "
                f"Not found in runtime parameters {list(params.keys())} "
                f"or environment variables."
            )
        return obj
    elif isinstance(obj, dict):
        return {k: substitute_params(v, params) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [substitute_params(item, params) for item in obj]
    else:
        return obj


def load_yaml(path: Path) -> Dict[str, Any]:
    """
    Load YAML file.

    An empty file loads as an empty dict so that every section falls back to
    its defaults.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If YAML is malformed or not a mapping
    """
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path, 'r') as f:
        try:
            config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}")

    if config is None:
        return {}

    if not isinstance(config, dict):
        raise ValueError(f"Configuration must be a YAML dict, got {type(config)}")

    return config


def load_config(
    path: Path,
    runtime_params: Union[Dict[str, Any], None] = None
) -> IntuneConfig:
    """
    Load and validate Intune configuration from YAML file.

    Args:
        path: Path to YAML configuration file
        runtime_params: Optional runtime parameters for substitution
                       (e.g., {"bands": 512})

    Returns:
        Validated IntuneConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If YAML is malformed or validation fails

    Example:
        ```python
        config = load_config(Path("configs/piano.yaml"), runtime_params={"bands": 512})
        ```
    """
    raw_config = load_yaml(path)

    # Always run to pick up environment variables
    raw_config = substitute_params(raw_config, runtime_params or {})

    try:
        config = IntuneConfig(**raw_config)
    except Exception as e:
        raise ValueError(
            f"Configuration validation failed for {path}:\n{e}\n\n"
            f"Check your YAML against the schema in intune/config/schema.py"
        )

    return config


def save_config(config: IntuneConfig, path: Path) -> None:
    """
    Save IntuneConfig to YAML file, creating parent directories as needed.
    """
    config_dict = config.model_dump(mode='json')

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w') as f:
        yaml.dump(config_dict, f, default_flow_style=False, sort_keys=False)
