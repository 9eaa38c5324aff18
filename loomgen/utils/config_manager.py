import ast
from typing import Any, Dict, Iterable, Optional

import yaml

from .log_config import setup_logging

logger = setup_logging(logger_name="Config", level="INFO", color="blue")


def parse_value(value: str) -> Any:
    """
    Parse string value into appropriate Python type.
    Handles integers, floats, booleans, None, lists, and strings.
    """
    try:
        return ast.literal_eval(value)
    except (ValueError, SyntaxError):
        return value


def update_nested_dict(d: Dict, key_path: str, value: Any) -> None:
    """
    Update a nested dictionary using a dot-separated key path.
    Example: update_nested_dict(config, "model.speed", 300)
    """
    keys = key_path.split(".")
    current = d
    for key in keys[:-1]:
        if not isinstance(current.get(key), dict):
            current[key] = {}
        current = current[key]
    current[keys[-1]] = value


class ConfigManager:
    """
    YAML-backed experiment configuration.

    The document has a ``model`` section (which model to build and its parameters) and
    an ``animation`` section (how to draw and encode it).
    """

    def __init__(self, config_path: Optional[str] = None, config: Optional[Dict] = None):
        self.config_path = config_path
        if config is not None:
            self.config = config
        elif config_path is not None:
            with open(config_path, "r") as config_file:
                self.config = yaml.safe_load(config_file) or {}
            logger.debug(f"Loaded configuration from {config_path}")
        else:
            self.config = {}

    def get(self, *keys: str) -> Any:
        """
        Retrieve a value from the config by walking nested keys.
        Example: config.get('animation', 'width')
        """
        value = self.config
        for key in keys:
            if isinstance(value, dict):
                value = value.get(key)
            else:
                return None
        return value

    def get_model_params(self) -> Dict[str, Any]:
        return self.get("model") or {}

    def get_animation_params(self) -> Dict[str, Any]:
        return self.get("animation") or {}

    def update_config(self, *keys: str, value: Any) -> None:
        """
        Update a value in the config.
        Example: config.update_config('model', 'speed', value=300)
        """
        update_nested_dict(self.config, ".".join(keys), value)

    def apply_overrides(self, overrides: Iterable[str]) -> None:
        """
        Apply ``key.subkey=value`` override strings.

        Raises:
            ValueError: If an override has no ``=``.
        """
        for override in overrides:
            key_path, sep, value_str = override.partition("=")
            if not sep or not key_path:
                raise ValueError(
                    f"Invalid override format '{override}'. Use key.subkey=value"
                )
            value = parse_value(value_str)
            update_nested_dict(self.config, key_path.strip(), value)
            logger.debug(f"Override {key_path} = {value!r}")

    def save_config(self, config_path: str) -> None:
        """Save the current configuration to a file."""
        with open(config_path, "w") as config_file:
            yaml.dump(self.config, config_file, default_flow_style=False)
