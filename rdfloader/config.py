"""
Loader configuration.

LoaderConfig gathers the request headers, timeout, fallback format and
local file limits used by GraphLoader. It can be built in code, from a
dictionary, or from a JSON file:

    {
        "timeout": 30,
        "user_agent": "my-crawler/2.0",
        "resource_package": "myapp.data",
        "max_safe_file_mb": 200
    }
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .constants import FormatNames, HTTPConfig, MemoryLimits
from .formats.registry import FormatRegistry

logger = logging.getLogger(__name__)


def _default_accept() -> str:
    return FormatRegistry.default().accept_header()


@dataclass
class LoaderConfig:
    """Configuration for GraphLoader.

    Attributes:
        user_agent: User-Agent header sent with HTTP requests
        accept: Accept header listing the negotiable RDF media types
        accept_charset: Accept-Charset header
        accept_encoding: Accept-Encoding header
        timeout: HTTP timeout in seconds; None waits indefinitely
        default_format: Format name used when nothing else resolves
        resource_package: Package that anchors resource names
        check_memory: Run the memory pre-flight check for local files
        force_large_file: Load local files above max_safe_file_mb anyway
        max_safe_file_mb: Largest local file accepted without force
    """
    user_agent: str = HTTPConfig.USER_AGENT
    accept: str = field(default_factory=_default_accept)
    accept_charset: str = HTTPConfig.ACCEPT_CHARSET
    accept_encoding: str = HTTPConfig.ACCEPT_ENCODING
    timeout: Optional[float] = None
    default_format: str = FormatNames.DEFAULT
    resource_package: str = "rdfloader"
    check_memory: bool = True
    force_large_file: bool = False
    max_safe_file_mb: float = MemoryLimits.MAX_SAFE_FILE_MB

    def __post_init__(self):
        """Validate configuration values."""
        for name in ("user_agent", "accept", "accept_charset", "accept_encoding",
                     "default_format", "resource_package"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"{name} must be a non-empty string")
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be > 0 when set")
        if self.max_safe_file_mb <= 0:
            raise ValueError("max_safe_file_mb must be > 0")

    def request_headers(self) -> Dict[str, str]:
        """Return the outbound content negotiation headers."""
        return {
            "Accept": self.accept,
            "Accept-Charset": self.accept_charset,
            "Accept-Encoding": self.accept_encoding,
            "User-Agent": self.user_agent,
        }

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, config_dict: Optional[Dict[str, Any]]) -> 'LoaderConfig':
        """Create config from dictionary.

        Args:
            config_dict: Configuration dictionary (can be None for defaults)

        Returns:
            LoaderConfig instance

        Raises:
            ValueError: If the dictionary contains unknown keys or invalid values
        """
        if config_dict is None:
            return cls()

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(config_dict) - known)
        if unknown:
            raise ValueError(f"Unknown loader configuration keys: {', '.join(unknown)}")
        return cls(**config_dict)

    @classmethod
    def from_file(cls, config_path: Union[str, os.PathLike]) -> 'LoaderConfig':
        """
        Load configuration from a JSON file.

        Args:
            config_path: Path to the configuration file.

        Returns:
            LoaderConfig instance.

        Raises:
            ValueError: If config_path is empty or the file contains invalid JSON.
            FileNotFoundError: If the configuration file doesn't exist.
        """
        if not config_path:
            raise ValueError("config_path cannot be empty")

        path = Path(config_path)
        if not path.is_file():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(
                f"Invalid JSON in configuration file {path} at line {e.lineno}, column {e.colno}: {e.msg}"
            ) from e
        except UnicodeDecodeError as e:
            raise ValueError(f"File encoding error in {path}: {e}") from e

        if not isinstance(config, dict):
            raise ValueError(f"Configuration file must contain a JSON object, got {type(config).__name__}")

        logger.debug(f"Loaded loader configuration from {path}")
        return cls.from_dict(config)
