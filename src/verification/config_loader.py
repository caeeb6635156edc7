"""Configuration loader with Pydantic validation for verification."""

from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field

from src.utils.io import load_yaml


class RemoteConfig(BaseModel):
    """Remote (fetch-and-match) protocol configuration.

    Attributes:
        timeout_s: HTTP timeout of the fetch collaborator
        ok_marker: Substring the response body must contain
        user_agent: User-Agent header sent with the request
    """

    timeout_s: float = Field(default=10.0, gt=0.0)
    ok_marker: str = Field(default="OK", min_length=1)
    user_agent: str = "certscan-verify/0.1"


class VerificationConfig(BaseModel):
    """Verification configuration.

    Attributes:
        mode: "remote" or "local"
        hash_database: Path to hashes.json for local mode
        remote: Remote protocol settings
    """

    mode: Literal["remote", "local"] = "remote"
    hash_database: Optional[Path] = None
    remote: RemoteConfig = Field(default_factory=RemoteConfig)


def load_config(config_path: Path) -> VerificationConfig:
    """Load and validate verification configuration from YAML file.

    Raises:
        FileNotFoundError: If config file does not exist
        pydantic.ValidationError: If configuration validation fails
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    return VerificationConfig(**load_yaml(config_path))


def get_default_config() -> VerificationConfig:
    """Get default configuration from bundled config.yaml file."""
    default_config_path = Path(__file__).parent / "config.yaml"
    if default_config_path.exists():
        return load_config(default_config_path)
    else:
        return VerificationConfig()
