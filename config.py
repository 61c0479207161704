"""
Configuration Management Module
Handles loading environment variables and provider API keys
"""

import os
import json
import logging
from datetime import timedelta
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


class Config:
    """Application configuration class"""

    # Flask Configuration
    ENV = os.getenv('FLASK_ENV', 'production')
    DEBUG = os.getenv('FLASK_DEBUG', 'False').lower() == 'true'
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

    # Database Configuration
    DATABASE_PATH = os.getenv('DATABASE_PATH', 'geolocation.db')

    # Server Configuration
    HOST = os.getenv('FLASK_HOST', '0.0.0.0')
    PORT = int(os.getenv('FLASK_PORT') or os.getenv('PORT') or 8080)

    # API Keys Configuration File
    CONFIG_FILE = os.getenv('API_KEYS_FILE', 'api_keys.json')

    # Cache policy
    CACHE_TTL = timedelta(hours=24)
    MAX_BULK_IPS = 100
    CACHED_LIST_LIMIT = 1000

    # Outbound provider calls (seconds)
    PROVIDER_TIMEOUT = float(os.getenv('PROVIDER_TIMEOUT', 8))

    @staticmethod
    def get_api_keys():
        """
        Get API keys from config file or environment variables
        Priority: config file > environment variables
        """
        keys = {
            'ipstack_api_key': os.getenv('IPSTACK_API_KEY', '')
        }

        if Path(Config.CONFIG_FILE).exists():
            try:
                with open(Config.CONFIG_FILE, 'r') as f:
                    stored_keys = json.load(f)
                    keys.update(stored_keys)
            except (OSError, ValueError) as e:
                logger.error("Error loading API keys from %s: %s", Config.CONFIG_FILE, e)

        return keys

    @staticmethod
    def get_ipstack_api_key():
        """Return the configured ipstack key, stripped ('' when absent)"""
        return (Config.get_api_keys().get('ipstack_api_key') or '').strip()

    # API Endpoints
    IPSTACK_API = "http://api.ipstack.com/{ip}"
    IP_GEO_API = "http://ip-api.com/json/{ip}?fields=country"
