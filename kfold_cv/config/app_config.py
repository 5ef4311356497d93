#!filepath: kfold_cv/config/app_config.py
import yaml
from pydantic import BaseModel, Field
from dotenv import load_dotenv
import os

from .log_config import LogConfig
from .platform_config import PlatformConfig
from .cross_validation_config import CrossValidationConfig
from .secret_config import SecretConfig


def project_root() -> str:
    """
    Project root derived from this file:
    kfold_cv/config/app_config.py → kfold_cv/config → kfold_cv → project_root
    """
    return os.path.abspath(os.path.join(os.path.dirname(__file__), "../../"))


def default_config_path() -> str:
    return os.path.join(os.path.dirname(os.path.abspath(__file__)), "base.yml")


class AppConfig(BaseModel):
    log: LogConfig = Field(default_factory=LogConfig)
    platform: PlatformConfig = Field(default_factory=PlatformConfig)
    cross_validation: CrossValidationConfig = Field(default_factory=CrossValidationConfig)
    secret: SecretConfig = Field(default_factory=SecretConfig)

    @classmethod
    def load(cls, path: str | None = None) -> "AppConfig":
        """
        Load YAML config + .env
        - defaults to kfold_cv/config/base.yml
        - independent of the current working directory
        """
        root = project_root()

        # 1) .env at the project root
        load_dotenv(os.path.join(root, ".env"))

        # 2) config file
        if path is None:
            path = default_config_path()

        if not os.path.exists(path):
            raise FileNotFoundError(f"Config file not found: {path}")

        # 3) YAML, then secrets from env
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        raw["secret"] = {
            "username": os.getenv("KFOLD_USERNAME", ""),
            "api_key": os.getenv("KFOLD_API_KEY", ""),
        }
        return cls(**raw)
