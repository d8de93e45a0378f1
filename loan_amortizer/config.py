"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class AmortizerConfig(BaseSettings):
    """Loan amortizer configuration"""

    # Engine limits
    max_total_periods: int = 1200  # 100 years of monthly payments
    payoff_tolerance: str = "0.000001"  # Residual balance treated as paid off

    # Defaults applied at the API boundary
    default_strategy: str = "reduce_quota"
    default_frequency: str = "monthly"

    # Export configuration
    export_precision: int = 2  # Decimal places in CSV/JSON exports

    # API configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8090

    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"  # json or text
    log_file: Optional[str] = None  # If None, logs to stdout

    class Config:
        env_prefix = "AMORTIZER_"
        env_file = ".env"
        case_sensitive = False


# Global configuration instance
config = AmortizerConfig()


def get_config() -> AmortizerConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> AmortizerConfig:
    """Reload configuration from environment"""
    global config
    config = AmortizerConfig()
    return config
