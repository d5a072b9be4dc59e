"""
Configuration loader for the barcode bot
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, Literal, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)


class SlackConfig(BaseModel):
    """Slack credentials are read from the environment, never from the YAML file"""

    bot_token_env: str = "SLACK_BOT_TOKEN"
    signing_secret_env: str = "SLACK_SIGNING_SECRET"
    verify_signatures: bool = True
    defer_replies: bool = False

    @property
    def bot_token(self) -> str:
        return os.getenv(self.bot_token_env, "").strip()

    @property
    def signing_secret(self) -> str:
        return os.getenv(self.signing_secret_env, "").strip()


class PermissionsConfig(BaseModel):
    """Role gate in front of code generation"""

    enabled: bool = True
    required_role: str = "Barcode Generators"
    cache_ttl_seconds: float = Field(default=300.0, ge=0.0)


class RenderingConfig(BaseModel):
    """Barcode image service"""

    provider: Literal["tec_it", "static"] = "tec_it"
    base_url: str = "https://barcode.tec-it.com/barcode.ashx"
    symbology: str = "Code128"
    dpi: int = Field(default=150, ge=72, le=600)
    bar_height: int = Field(default=50, ge=1)
    bar_width: int = Field(default=2, ge=1)
    quiet_zone: int = Field(default=5, ge=0)
    color: str = "#000000"
    background: str = "#ffffff"
    extra_params: Dict[str, str] = Field(default_factory=dict)


class ServerConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=1, le=65535)
    commands_path: str = "/slack/commands"


class BrandingConfig(BaseModel):
    title: str = "Barcode Generator"
    footer: str = "Barcode Generator"
    subtitle: str = "Generated by Barcode Bot"
    accent_color: str = "#f47738"
    error_color: str = "#dc3545"


class BotConfig(BaseModel):
    slack: SlackConfig = Field(default_factory=SlackConfig)
    permissions: PermissionsConfig = Field(default_factory=PermissionsConfig)
    rendering: RenderingConfig = Field(default_factory=RenderingConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    branding: BrandingConfig = Field(default_factory=BrandingConfig)


def default_config_path() -> Path:
    return Path(__file__).parent.parent.parent / "config" / "bot_config.yml"


def load_bot_config(config_path: Optional[Path] = None) -> BotConfig:
    """
    Load and validate bot configuration from a YAML file

    Args:
        config_path: Path to config file. Defaults to config/bot_config.yml,
            or BARCODE_BOT_CONFIG when that variable is set.

    Returns:
        Validated BotConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValidationError: If config doesn't match schema
    """
    load_dotenv()

    if config_path is None:
        env_path = os.getenv("BARCODE_BOT_CONFIG", "").strip()
        config_path = Path(env_path) if env_path else default_config_path()

    if not config_path.exists():
        raise FileNotFoundError(f"Bot config file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    try:
        cfg = BotConfig(**data)
        logger.info("Successfully loaded bot config from %s", config_path)
        return cfg
    except ValidationError as e:
        logger.error("Bot config validation failed: %s", e)
        raise
