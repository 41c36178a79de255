import os
import json
import logging

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger("tilewall")


class Settings:
    """Configuration management with environment variable support"""

    ENV_PREFIX = "TILEWALL_"

    DEFAULT_SETTINGS = {
        "width": 1280,
        "height": 720,
        "cell_size": 204,
        "hold_frames": 100,
        "fade_frames": 50,
        "hold_jitter": 10,
        "noise_scale": 0.08,
        "light_threshold": 0.6,
        "bg_light": "#f5f5f5",
        "bg_dark": "#000000",
        "fps": 60,
        "palette": "#ff3ea5,#00d1ff,#00d36f,#ffa500,#ffd83e,#ffffff",
        "capture_dir": ".",
        "log_level": "INFO",
    }

    @classmethod
    def load(cls, config_file=None):
        """Load settings from defaults, a JSON file, .env and the environment"""
        settings = cls.DEFAULT_SETTINGS.copy()

        if config_file:
            if os.path.exists(config_file):
                try:
                    with open(config_file, "r") as f:
                        settings.update(json.load(f))
                except (OSError, ValueError) as e:
                    logger.warning(f"Error loading config file {config_file}: {e}")
            else:
                logger.warning(f"Config file not found: {config_file}")

        load_dotenv(find_dotenv(usecwd=True))

        # Override with environment variables
        for key, default in cls.DEFAULT_SETTINGS.items():
            env_key = f"{cls.ENV_PREFIX}{key.upper()}"
            if env_key not in os.environ:
                continue
            value = os.environ[env_key]

            # Type conversion follows the default's type
            try:
                if isinstance(default, bool):
                    settings[key] = value.lower() in ("true", "yes", "1")
                elif isinstance(default, int):
                    settings[key] = int(value)
                elif isinstance(default, float):
                    settings[key] = float(value)
                else:
                    settings[key] = value
            except ValueError:
                logger.warning(f"Ignoring invalid value for {env_key}: {value!r}")

        return settings

    @staticmethod
    def setup_logging(log_level):
        """Configure logging based on settings"""
        numeric_level = getattr(logging, str(log_level).upper(), None)
        if not isinstance(numeric_level, int):
            numeric_level = logging.INFO

        logging.basicConfig(
            level=numeric_level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )

        return logging.getLogger("tilewall")
