# electrum_jsonrpc/core/config.py

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Client Settings

    Constructed explicitly by whoever needs it (the command line entry point,
    the test session). There is no module-level instance.
    """

    # Electrum daemon
    ELECTRUM_DAEMON_ADDRESS: str = "http://127.0.0.1:7000"
    ELECTRUM_USER: str = "test"
    ELECTRUM_PASSWORD: str = "test"
    ELECTRUM_TIMEOUT: float = 30.0  # seconds, handed to httpx

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "simple"  # simple or json

    model_config = {
        "env_file": ".env",
        "case_sensitive": True,
        "extra": "ignore"
    }
