import yaml
import os
import logging
from dotenv import load_dotenv
from typing import Dict, Any, List
from .utils.secrets_manager import SecretsManager, SecretSource

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "config/config.yaml"


class Config:
    def __init__(self, config_file: str = None):
        # Load environment variables from .env
        load_dotenv()

        self.config_file = config_file or os.getenv("SIGNAGE_CONFIG", DEFAULT_CONFIG_FILE)

        # The YAML file is optional: every setting has a default
        try:
            if os.path.exists(self.config_file):
                with open(self.config_file, 'r', encoding='utf-8') as file:
                    self.config = yaml.safe_load(file) or {}
            else:
                logger.warning(f"Config file {self.config_file} not found. Using defaults.")
                self.config = {}
        except yaml.YAMLError as e:
            logger.error(f"Error loading config file {self.config_file}: {str(e)}")
            self.config = {}

        self._init_secrets_manager()

    def _init_secrets_manager(self):
        """Initializes the secrets manager from SECRET_SOURCE/DOTENV_PATH"""
        secret_source_str = os.getenv("SECRET_SOURCE", "env").lower()
        source_map = {
            "env": SecretSource.ENV,
            "dotenv": SecretSource.DOTENV,
        }
        source = source_map.get(secret_source_str, SecretSource.ENV)
        dotenv_path = os.getenv("DOTENV_PATH", ".env")

        # YAML values act as fallbacks for secrets
        config_defaults = {}
        admin = self._section("admin")
        if admin.get("username"):
            config_defaults["ADMIN_USER"] = admin["username"]
        if admin.get("password"):
            config_defaults["ADMIN_PASS"] = admin["password"]
        if self._section("weather").get("api_key"):
            config_defaults["OPENWEATHER_API_KEY"] = self._section("weather")["api_key"]

        self.secrets_manager = SecretsManager(
            source=source,
            dotenv_path=dotenv_path,
            config_defaults=config_defaults
        )
        logger.debug(f"Using secret source: {source.value}")

    def _section(self, name: str) -> Dict[str, Any]:
        return self.config.get(name) or {}

    @property
    def server_config(self) -> dict:
        server = self._section("server")
        return {
            "host": server.get("host", "0.0.0.0"),
            "port": int(server.get("port", 3000)),
            "debug": bool(server.get("debug", False))
        }

    @property
    def security_config(self) -> dict:
        security = self._section("security")
        return {
            "enable_cors": bool(security.get("enable_cors", True)),
            "allowed_origins": security.get("allowed_origins", "*")
        }

    @property
    def session_config(self) -> dict:
        """Session cookie settings. The signing secret comes from SESSION_SECRET."""
        session = self._section("session")
        return {
            "secret": self.secrets_manager.get_session_secret(),
            "cookie_name": session.get("cookie_name", "signage_session"),
            "expiry_hours": int(session.get("expiry_hours", 24)),
            "secure": bool(session.get("secure", False)),
        }

    @property
    def admin_credentials(self) -> dict:
        return self.secrets_manager.get_admin_credentials()

    @property
    def postgres_config(self) -> dict:
        """Postgres credentials from the environment.

        Expected variables:
        - PGHOST, PGPORT, PGUSER, PGPASSWORD, PGDATABASE
        """
        return {
            "host": os.getenv("PGHOST", "localhost"),
            "port": int(os.getenv("PGPORT", "5432")),
            "user": os.getenv("PGUSER", ""),
            "password": os.getenv("PGPASSWORD", ""),
            "database": os.getenv("PGDATABASE", ""),
        }

    @property
    def weather_config(self) -> dict:
        weather = self._section("weather")
        return {
            "api_key": self.secrets_manager.get_weather_api_key(),
            "city": weather.get("city", "Chengdu,cn"),
            "units": weather.get("units", "metric"),
            "timeout": int(weather.get("timeout", 10)),
        }

    @property
    def signage_config(self) -> dict:
        signage = self._section("signage")
        slides: List[str] = signage.get("slides") or []
        return {
            "school_name": signage.get("school_name", "University of Electronic Science and Technology of China"),
            "logo_url": signage.get("logo_url", ""),
            "announcement": signage.get("announcement", ""),
            "feed_limit": int(signage.get("feed_limit", 5)),
            "slides": list(slides),
            "slide_interval_seconds": int(signage.get("slide_interval_seconds", 10)),
        }

    @property
    def lifecycle_config(self) -> dict:
        lifecycle = self._section("lifecycle")
        return {
            "prune_interval_seconds": int(lifecycle.get("prune_interval_seconds", 60)),
        }

    @property
    def admin_client_config(self) -> dict:
        """Settings for the out-of-process pruner talking to the admin API."""
        client = self._section("admin_client")
        return {
            "base_url": os.getenv("SIGNAGE_BASE_URL", client.get("base_url", "http://localhost:3000")),
            "timeout": int(client.get("timeout", 30)),
        }

    @property
    def logging_config(self) -> dict:
        log_cfg = self._section("logging")
        return {
            "level": os.getenv("LOG_LEVEL", log_cfg.get("level", "INFO")),
            "file": log_cfg.get("file", "")
        }
