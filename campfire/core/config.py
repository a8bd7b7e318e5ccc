# campfire/core/config.py
import os
from dotenv import load_dotenv

class Settings:
    """
    Setup environment variables.
        - CAMPFIRE_SUBDOMAIN the account subdomain (https://<subdomain>.campfirenow.com)
        - CAMPFIRE_TOKEN the API token; takes precedence over username/password
        - CAMPFIRE_SSL whether to talk https ("true") or plain http
    """

    # Load environment variables from the .env file
    load_dotenv()

    CAMPFIRE_SUBDOMAIN: str = os.getenv("CAMPFIRE_SUBDOMAIN", "")
    CAMPFIRE_HOST: str = os.getenv("CAMPFIRE_HOST", "campfirenow.com")

    CAMPFIRE_TOKEN: str = os.getenv("CAMPFIRE_TOKEN", "")
    CAMPFIRE_USERNAME: str = os.getenv("CAMPFIRE_USERNAME", "")
    CAMPFIRE_PASSWORD: str = os.getenv("CAMPFIRE_PASSWORD", "")

    CAMPFIRE_SSL: bool = os.getenv("CAMPFIRE_SSL", "true").lower() == "true"
    CAMPFIRE_TIMEOUT: float = float(os.getenv("CAMPFIRE_TIMEOUT", "30"))

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

settings = Settings()
