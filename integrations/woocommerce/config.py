"""
WooCommerce Client Configuration
Connection settings for WooCommerceClient, optionally loaded from the environment.
"""

import logging
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

from .errors import WooCommerceConfigError

logger = logging.getLogger(__name__)

DEFAULT_API_PATH = "wp-json/wc/v2"
DEFAULT_TIMEOUT = 30.0


class WooCommerceConfig(BaseModel):
    """Store host and REST API credentials"""
    host: str = ""
    consumer_key: str = ""
    consumer_secret: str = ""
    api_path: str = DEFAULT_API_PATH
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "WooCommerceConfig":
        """
        Build a configuration from environment variables.

        Reads a .env file first when present. Missing values are left
        empty; WooCommerceClient rejects them at construction.

        Variables:
            WOOCOMMERCE_HOST, WOOCOMMERCE_CONSUMER_KEY,
            WOOCOMMERCE_CONSUMER_SECRET, WOOCOMMERCE_API_PATH,
            WOOCOMMERCE_TIMEOUT

        Raises:
            WooCommerceConfigError: When WOOCOMMERCE_TIMEOUT is not numeric
        """
        load_dotenv(dotenv_path)

        timeout = os.getenv("WOOCOMMERCE_TIMEOUT")
        try:
            timeout = float(timeout) if timeout else DEFAULT_TIMEOUT
        except ValueError:
            raise WooCommerceConfigError(f"WOOCOMMERCE_TIMEOUT must be a number of seconds (got {timeout!r})")

        config = cls(
            host=os.getenv("WOOCOMMERCE_HOST", ""),
            consumer_key=os.getenv("WOOCOMMERCE_CONSUMER_KEY", ""),
            consumer_secret=os.getenv("WOOCOMMERCE_CONSUMER_SECRET", ""),
            api_path=os.getenv("WOOCOMMERCE_API_PATH", DEFAULT_API_PATH),
            timeout=timeout,
        )
        logger.debug(f"Loaded WooCommerce config for {config.host or '<unset host>'}")
        return config
