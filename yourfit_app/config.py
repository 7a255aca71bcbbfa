"""Configuration helpers for the YourFit wardrobe app."""

from dataclasses import dataclass
from pathlib import Path
import os
from typing import Optional

DEFAULT_STORAGE_BACKEND = "json"
STORAGE_BACKENDS = ("json", "sqlite", "memory")
DEFAULT_STORAGE_PATHS = {
    "json": "data/yourfit.json",
    "sqlite": "data/yourfit.db",
}


@dataclass
class YourFitConfig:
    """Configuration values for the wardrobe app.

    Only local storage is configurable: the app never talks to the network, so
    the interesting choices are which key-value backend holds the catalog and
    saved outfits, and where it lives on disk.
    """

    storage_backend: str = DEFAULT_STORAGE_BACKEND
    storage_path: Optional[str] = None
    log_level: str = "INFO"
    environment: str | None = None

    def __post_init__(self) -> None:
        backend = (self.storage_backend or DEFAULT_STORAGE_BACKEND).strip().lower()
        if backend not in STORAGE_BACKENDS:
            raise ValueError(
                f"Unsupported storage backend '{self.storage_backend}'. Allowed: {list(STORAGE_BACKENDS)}"
            )
        self.storage_backend = backend

    @property
    def resolved_storage_path(self) -> Optional[str]:
        """Return the configured path or the backend default (None for memory)."""

        return self.storage_path or DEFAULT_STORAGE_PATHS.get(self.storage_backend)

    @classmethod
    def from_env(cls) -> "YourFitConfig":
        """Build a config from environment variables or an environment YAML file.

        Environment specific YAML lives in ``config/environments/<env>.yaml`` by
        default and is merged with environment variables, which win.
        """

        env_name = os.getenv("APP_ENV")
        config_path = os.getenv("APP_CONFIG_PATH")
        config_dir = Path(os.getenv("YOURFIT_CONFIG_DIR", "config/environments"))
        yaml_config: dict = {}

        if config_path:
            path = Path(config_path)
        elif env_name:
            path = config_dir / f"{env_name}.yaml"
        else:
            path = None

        if path and path.exists():
            yaml_config = cls._load_yaml_config(path)

        def get_value(key: str, default: Optional[str] = None) -> Optional[str]:
            env_key = f"YOURFIT_{key.upper()}"
            return os.getenv(env_key, yaml_config.get(key, default))

        storage_backend = get_value("storage_backend", DEFAULT_STORAGE_BACKEND)
        storage_path = get_value("storage_path")
        log_level = get_value("log_level", os.getenv("LOG_LEVEL", "INFO"))

        return cls(
            storage_backend=str(storage_backend or DEFAULT_STORAGE_BACKEND),
            storage_path=storage_path,
            log_level=str(log_level or "INFO").upper(),
            environment=env_name,
        )

    @staticmethod
    def _load_yaml_config(path: Path) -> dict:
        """Parse a minimal YAML/INI-style config without external dependencies."""

        config: dict[str, str] = {}
        for line in path.read_text().splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            if ":" not in stripped:
                continue
            key, raw_value = stripped.split(":", 1)
            value = raw_value.strip()
            if (value.startswith("\"") and value.endswith("\"")) or (
                value.startswith("'") and value.endswith("'")
            ):
                value = value[1:-1]
            config[key.strip()] = value
        return config
