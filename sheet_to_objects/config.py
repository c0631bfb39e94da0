"""
Configuration and logging setup for the command-line tool.

The binding engine itself takes explicit arguments only; this module is
for the CLI and for hosts that want the same YAML-driven defaults.
"""

import logging
import os

import yaml

logger = logging.getLogger(__name__)

DEFAULTS = {
    "log_level": "INFO",
    # Used when a worksheet has no frozen panes (and always for CSV)
    "frozen_rows": 1,
    "frozen_cols": 0,
    "output_format": "json",
    "strict": False,
}


def load_config(config_path=None) -> dict:
    """Load configuration from a YAML file, merged over :data:`DEFAULTS`."""
    config = dict(DEFAULTS)
    if config_path and os.path.exists(config_path):
        with open(config_path, "r") as f:
            user_config = yaml.safe_load(f) or {}
        unknown = set(user_config) - set(DEFAULTS)
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {sorted(unknown)}")
        config.update({k: v for k, v in user_config.items() if k in DEFAULTS})
    return config


def setup_logging(level_str: str = "INFO"):
    """Configure logging."""
    level = getattr(logging, str(level_str).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%H:%M:%S'
    )
