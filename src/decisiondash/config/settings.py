"""
Application settings using Pydantic.

Provides environment-based configuration loading with DECISIONDASH_ prefix.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # Prometheus metric exported by decision services for each evaluated decision
    metric_name: str = "dmn_result"

    # Packaged templates (file names under decisiondash/dashboards/templates)
    operational_template: str = "operational-dashboard-template.json"
    domain_template: str = "domain-dashboard-template.json"

    # Output
    output_dir: str = "generated"
    json_indent: int = 2

    # Add the "Audit UI" link to generated dashboards by default
    generate_audit_link: bool = False

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_prefix = "DECISIONDASH_"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
