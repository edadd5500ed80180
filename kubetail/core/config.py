"""Configuration management"""
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .logger import Logger
from ..utils.parsers import parse_bool

CONFIG_DIR = Path.home() / ".kube-tail"
CONFIG_FILE = CONFIG_DIR / "config.yaml"

DEFAULTS: Dict[str, Any] = {
    "namespace": "default",
    "since": "10s",
    "tail": -1,
    "timestamps": False,
    "colored_output": "line",
    "skip_colors": "",
    "jq": None,
    "line_buffered": False,
    "follow": "true",
    "previous": False,
    "regex": "substring",
    "show_color_index": False,
    "palette_size": 256,
}

# KUBETAIL_<NAME> environment variables and how to coerce them
ENV_VARS = {
    "KUBETAIL_NAMESPACE": ("namespace", str),
    "KUBETAIL_SINCE": ("since", str),
    "KUBETAIL_TAIL": ("tail", int),
    "KUBETAIL_TIMESTAMPS": ("timestamps", parse_bool),
    "KUBETAIL_COLORED_OUTPUT": ("colored_output", str),
    "KUBETAIL_SKIP_COLORS": ("skip_colors", str),
    "KUBETAIL_JQ_SELECTOR": ("jq", str),
    "KUBETAIL_LINE_BUFFERED": ("line_buffered", parse_bool),
    "KUBETAIL_FOLLOW": ("follow", str),
    "KUBETAIL_PREVIOUS": ("previous", parse_bool),
    "KUBETAIL_MATCH_MODE": ("regex", str),
    "KUBETAIL_SHOW_COLOR_INDEX": ("show_color_index", parse_bool),
}


class TailConfig:
    """Defaults for command line options, from config file then environment"""

    def __init__(self, config_file: Optional[Path] = None,
                 environ: Optional[Mapping[str, str]] = None):
        self.config_file = config_file or CONFIG_FILE
        self.environ = os.environ if environ is None else environ

    @staticmethod
    def load_yaml(filepath: Path) -> dict:
        if not filepath.exists():
            return {}
        try:
            data = yaml.safe_load(filepath.read_text()) or {}
        except (OSError, yaml.YAMLError) as e:
            Logger.error(f"Failed to load {filepath}: {e}")
            return {}
        if not isinstance(data, dict):
            Logger.error(f"Ignoring {filepath}: expected a mapping")
            return {}
        return data

    @staticmethod
    def coerce(key: str, value: Any) -> Any:
        """Give a YAML value the type of the option it sets"""
        default = DEFAULTS[key]
        if isinstance(value, list):
            return ",".join(str(v) for v in value)
        if isinstance(default, bool):
            return parse_bool(value)
        if isinstance(default, int):
            return int(value)
        if isinstance(value, bool):
            # `colored-output: false` is a YAML boolean
            return str(value).lower()
        return None if value is None else str(value)

    def load(self) -> Dict[str, Any]:
        values = dict(DEFAULTS)

        for key, value in self.load_yaml(self.config_file).items():
            key = key.replace("-", "_")
            if key not in DEFAULTS:
                Logger.warn(f"Unknown setting '{key}' in {self.config_file}")
                continue
            try:
                values[key] = self.coerce(key, value)
            except (TypeError, ValueError):
                Logger.warn(f"Ignoring {key}={value!r} in {self.config_file}")

        for env_name, (key, convert) in ENV_VARS.items():
            raw = self.environ.get(env_name)
            if raw is None or raw == "":
                continue
            try:
                values[key] = convert(raw)
            except ValueError:
                Logger.warn(f"Ignoring {env_name}={raw!r}")

        Logger.verbose_log(f"Defaults: {values}")
        return values
