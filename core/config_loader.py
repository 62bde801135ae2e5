import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field


class DatabaseConfig(BaseModel):
    url: str = "sqlite:///./admissions.db"
    echo: bool = False


class AdmissionsConfig(BaseModel):
    """
    Application gating and arbitration settings.
    """
    # Max non-rejected applications per student per institution/company
    application_cap: int = Field(default=2, ge=1)

    # select_admission retries the whole transaction on a commit conflict
    select_retry_attempts: int = Field(default=3, ge=1)
    select_retry_wait_seconds: float = Field(default=0.1, ge=0)


class ScoringConfig(BaseModel):
    # Job applications and qualified-applicant lists use this score gate;
    # course applications use the all-checks-pass rule instead.
    job_qualification_threshold: float = Field(default=60.0, ge=0, le=100)


class RankingConfig(BaseModel):
    """Job matching result policy."""
    min_score: float = Field(default=50.0, ge=0, le=100)  # strict: score > min_score
    top_k: int = Field(default=10, ge=1)


class NotificationConfig(BaseModel):
    enabled: bool = True


class WebConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8080


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class AppConfig(BaseModel):
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    admissions: AdmissionsConfig = Field(default_factory=AdmissionsConfig)
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    ranking: RankingConfig = Field(default_factory=RankingConfig)
    notifications: NotificationConfig = Field(default_factory=NotificationConfig)
    web: WebConfig = Field(default_factory=WebConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_project_root() -> Path:
    return Path(__file__).parent.parent


def _load_yaml_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    path = Path(config_path) if config_path else Path(os.environ.get("ADMISSIONS_CONFIG", "config.yaml"))
    if not path.exists():
        # Fall back to the repo root when running from a subdirectory
        path = get_project_root() / "config.yaml"
    if not path.exists():
        return {}

    with open(path, "r") as f:
        return yaml.safe_load(f) or {}


def _apply_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    env_db_url = os.environ.get("DATABASE_URL")
    if env_db_url:
        data.setdefault('database', {})
        data['database']['url'] = env_db_url

    if 'WEB_HOST' in os.environ:
        data.setdefault('web', {})
        data['web']['host'] = os.environ['WEB_HOST']

    if 'WEB_PORT' in os.environ:
        data.setdefault('web', {})
        data['web']['port'] = int(os.environ['WEB_PORT'])

    if 'LOG_LEVEL' in os.environ:
        data.setdefault('logging', {})
        data['logging']['level'] = os.environ['LOG_LEVEL']

    return data


def load_config(config_path: Optional[str] = None) -> AppConfig:
    data = _load_yaml_config(config_path)
    data = _apply_env_overrides(data)
    return AppConfig(**data)


@lru_cache()
def get_config() -> AppConfig:
    """Cached application configuration (YAML file plus env overrides)."""
    return load_config()
