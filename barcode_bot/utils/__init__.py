"""
Utility modules for the barcode bot
"""
from .config_loader import BotConfig, load_bot_config

__all__ = [
    'BotConfig',
    'load_bot_config',
]
