"""Application settings loaded from environment variables via pydantic-settings.

Values are read from two sources, in priority order:

  1. **Environment variables** -- e.g. ``FLARESOLVERR_URL=http://proxy:8191/v1``
  2. **.env file** -- key=value lines in the project root ``.env`` file

Field ``flaresolverr_url`` maps to env var ``FLARESOLVERR_URL`` and so on
(pydantic-settings uppercases and matches).  Defaults apply when neither
source sets a value.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from coverscout.utils.errors import ConfigurationError


class Settings(BaseSettings):
    """coverscout application settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # === Solving proxy (FlareSolverr) ===
    flaresolverr_url: str = "http://flaresolverr:8191/v1"
    # Proxy-side render budget, sent as ``maxTimeout`` in every request.
    flaresolverr_max_timeout_ms: int = 60000
    # Client-side bound on one proxy call; must exceed the render budget.
    flaresolverr_call_timeout: float = 70.0

    # === Target site ===
    site_base_url: str = "https://www.whosampled.com"

    # === Retry policy ===
    fetch_max_attempts: int = 3
    fetch_retry_base_delay: float = 2.0  # seconds; multiplied by attempt number

    # === App Config ===
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    app_env: str = "development"
    log_level: str = "INFO"

    def validate_fetch_budget(self) -> None:
        """Reject retry and timeout settings the fetcher cannot work with.

        Raises
        ------
        ConfigurationError
            If the attempt budget or a timeout is non-positive, or the
            client-side call timeout does not leave room for the proxy's
            own render timeout.
        """
        if self.fetch_max_attempts < 1:
            raise ConfigurationError(
                f"FETCH_MAX_ATTEMPTS must be >= 1, got {self.fetch_max_attempts}"
            )
        if self.fetch_retry_base_delay < 0:
            raise ConfigurationError(
                f"FETCH_RETRY_BASE_DELAY must be >= 0, got {self.fetch_retry_base_delay}"
            )
        if self.flaresolverr_max_timeout_ms <= 0 or self.flaresolverr_call_timeout <= 0:
            raise ConfigurationError("FlareSolverr timeouts must be positive")
        if self.flaresolverr_call_timeout * 1000 <= self.flaresolverr_max_timeout_ms:
            raise ConfigurationError(
                "FLARESOLVERR_CALL_TIMEOUT must exceed FLARESOLVERR_MAX_TIMEOUT_MS",
                provider_name="flaresolverr",
            )
        if not self.flaresolverr_url:
            raise ConfigurationError("FLARESOLVERR_URL is empty", provider_name="flaresolverr")
