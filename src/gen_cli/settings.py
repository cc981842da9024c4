"""gen-cli configuration settings.

FAL_KEY is looked up in the process environment first, then ``./.env``,
then ``~/.gen-cli/.env``.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, SecretStr, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from gen_cli.core.exceptions import ConfigurationError

CONFIG_DIR_NAME = ".gen-cli"
ENV_FILE_NAME = ".env"

MISSING_KEY_HINT = "Set FAL_KEY environment variable or create ~/.gen-cli/.env"


class GenSettings(BaseSettings):
    """Configuration for the fal API client.

    All settings can be configured via environment variables or .env file.

    Attributes:
        fal_key: fal API credential, sent as ``Authorization: Key <fal_key>``
        fal_base_url: API host the model paths are appended to
        request_timeout: Upper bound in seconds for the generation request
        download_timeout: Upper bound in seconds for fetching the result image
        enable_safety_checker: Value sent as ``enable_safety_checker``
    """

    # Empty values count as unset so lookup falls through to the next source
    model_config = SettingsConfigDict(
        env_file=ENV_FILE_NAME,
        env_ignore_empty=True,
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
    )

    fal_key: SecretStr = Field(
        ...,
        min_length=1,
        alias="FAL_KEY",
        description="fal API key",
    )
    fal_base_url: str = Field(
        default="https://fal.run",
        alias="FAL_BASE_URL",
        description="Base URL of the synchronous fal endpoint",
    )
    request_timeout: float = Field(
        default=300.0,
        alias="GEN_REQUEST_TIMEOUT",
        description="Generation request timeout in seconds",
    )
    download_timeout: float = Field(
        default=120.0,
        alias="GEN_DOWNLOAD_TIMEOUT",
        description="Image download timeout in seconds",
    )
    enable_safety_checker: bool = Field(
        default=False,
        alias="GEN_ENABLE_SAFETY_CHECKER",
        description="Ask the API to run its safety checker",
    )

    def get_key_value(self) -> str:
        """Get the API key as a plain string."""
        return self.fal_key.get_secret_value()


_settings_instance: GenSettings | None = None


def get_env_files() -> tuple[Path, str]:
    """Return the .env files to read, lowest priority first.

    Resolved on each call so a changed HOME is honoured.
    """
    return (Path.home() / CONFIG_DIR_NAME / ENV_FILE_NAME, ENV_FILE_NAME)


def get_settings() -> GenSettings:
    """Get default settings (singleton, reads from environment).

    Later env files win over earlier ones; real environment variables
    beat both.

    Returns:
        GenSettings instance.

    Raises:
        ConfigurationError: If FAL_KEY is missing or a setting is invalid.
    """
    global _settings_instance
    if _settings_instance is None:
        get_config_dir()
        try:
            _settings_instance = GenSettings(_env_file=get_env_files())
        except ValidationError as e:
            missing = [
                str(err["loc"][0])
                for err in e.errors()
                if err["type"] == "missing"
                or (err["loc"] and err["loc"][0] in ("FAL_KEY", "fal_key"))
            ]
            if missing:
                msg = f"FAL_KEY not found\n{MISSING_KEY_HINT}"
                raise ConfigurationError(
                    msg, details={"missing_keys": missing}
                ) from e
            msg = f"Invalid configuration: {e}"
            raise ConfigurationError(msg) from e
    return _settings_instance


def reset_settings() -> None:
    """Reset singleton (for testing)."""
    global _settings_instance
    _settings_instance = None


def get_config_dir() -> Path | None:
    """Return ``~/.gen-cli``, creating it if needed.

    Returns:
        The directory, or None if it cannot be created.
    """
    config_dir = Path.home() / CONFIG_DIR_NAME
    try:
        config_dir.mkdir(parents=True, exist_ok=True)
    except OSError:
        return None
    return config_dir


def get_output_dir() -> Path | None:
    """Return ``~/.gen-cli/output``, creating it if needed."""
    config_dir = get_config_dir()
    if config_dir is None:
        return None
    output_dir = config_dir / "output"
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError:
        return None
    return output_dir
