"""Configuration helpers for the Travel Stylist app."""

from dataclasses import dataclass
from pathlib import Path
import os
from typing import Optional

DEFAULT_GEMINI_MODEL = "gemini-1.5-flash"
DEFAULT_SEARCH_RESULT_COUNT = 6
DEFAULT_MAX_SESSIONS = 1000
DEFAULT_HISTORY_LIMIT = 50


@dataclass
class StylistConfig:
    """Configuration values for the pipeline and its external collaborators.

    Any credential left unset switches the matching collaborator to its offline
    implementation when the app is wired together.
    """

    model: str = DEFAULT_GEMINI_MODEL
    google_api_key: Optional[str] = None
    search_api_key: Optional[str] = None
    search_engine_id: Optional[str] = None
    openweather_api_key: Optional[str] = None
    preference_store_path: Optional[str] = None
    search_result_count: int = DEFAULT_SEARCH_RESULT_COUNT
    products_per_slot: int = 1
    request_timeout_seconds: float = 10.0
    max_sessions: int = DEFAULT_MAX_SESSIONS
    history_limit: int = DEFAULT_HISTORY_LIMIT
    environment: str | None = None

    @property
    def llm_enabled(self) -> bool:
        return bool(self.google_api_key)

    @property
    def search_enabled(self) -> bool:
        return bool(self.search_api_key and self.search_engine_id)

    @classmethod
    def from_env(cls) -> "StylistConfig":
        """Build a config from environment variables or an environment YAML file.

        Environment specific YAML lives in ``config/environments/<env>.yaml`` by
        default and is merged with environment variables so that secrets can be
        injected by the runtime.
        """

        env_name = os.getenv("APP_ENV")
        config_path = os.getenv("APP_CONFIG_PATH")
        config_dir = Path(os.getenv("STYLIST_CONFIG_DIR", "config/environments"))
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
            env_key = key.upper()
            return os.getenv(env_key, yaml_config.get(key, default))

        return cls(
            model=str(get_value("model", DEFAULT_GEMINI_MODEL) or DEFAULT_GEMINI_MODEL),
            google_api_key=get_value("google_api_key"),
            search_api_key=get_value("google_search_api_key"),
            search_engine_id=get_value("google_cse_id"),
            openweather_api_key=get_value("openweather_api_key"),
            preference_store_path=get_value("preference_store_path"),
            search_result_count=int(get_value("search_result_count") or DEFAULT_SEARCH_RESULT_COUNT),
            products_per_slot=int(get_value("products_per_slot") or 1),
            request_timeout_seconds=float(get_value("request_timeout_seconds") or 10.0),
            max_sessions=int(get_value("max_sessions") or DEFAULT_MAX_SESSIONS),
            history_limit=int(get_value("history_limit") or DEFAULT_HISTORY_LIMIT),
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
