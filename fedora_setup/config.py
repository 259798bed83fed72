from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from .errors import ConfigurationError

DEFAULT_CONFIG_PATH = "~/.config/fedora-setup/config.yaml"


@dataclass(frozen=True)
class SetupConfig:
    raw: Dict[str, Any] = field(default_factory=dict)

    def _paths(self) -> Dict[str, Any]:
        return self.raw.get("paths") or {}

    @property
    def state_file(self) -> Optional[str]:
        return self._paths().get("state_file")

    @property
    def backup_root(self) -> Optional[str]:
        return self._paths().get("backup_root")

    @property
    def log_dir(self) -> Optional[str]:
        return self._paths().get("log_dir")

    @property
    def skip_network_check(self) -> bool:
        return bool(self.raw.get("skip_network_check", False))


def load_setup_config(path: Optional[str] = None) -> SetupConfig:
    """Load the optional YAML config.

    A missing file at the default location is an empty config; a missing file
    that was asked for explicitly is an error.
    """

    explicit = path is not None
    p = Path(path or DEFAULT_CONFIG_PATH).expanduser()
    if not p.exists():
        if explicit:
            raise ConfigurationError(f"Config file not found: {p}")
        return SetupConfig()

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ConfigurationError(f"Config file must be YAML: {p}")

    try:
        import yaml  # type: ignore
    except ImportError as e:
        raise ConfigurationError("PyYAML is required to read the setup config") from e

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Config file is not valid YAML: {p}") from e

    if not isinstance(raw, dict):
        raise ConfigurationError("Setup config must contain a mapping/object")

    paths = raw.get("paths")
    if paths is not None and not isinstance(paths, dict):
        raise ConfigurationError("Setup config key 'paths' must be a mapping")

    return SetupConfig(raw=raw)
