"""
Application configuration.

Responsibilities:
- Read environment variables
- Provide a typed, immutable config object for the CLI layer

Non-responsibilities:
- No encoding rules (see constants.py)
- No runtime mutation
- The codec package never reads configuration
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from constants import UTF16_BYTE_ORDERS


@dataclass(frozen=True)
class AppConfig:
    """
    Immutable application configuration.

    Constructed once at CLI startup and passed downward.
    """

    # ------------------------------------------------------------------
    # Environment
    # ------------------------------------------------------------------

    env: str
    log_level: str

    # ------------------------------------------------------------------
    # Observability
    # ------------------------------------------------------------------

    enable_json_logs: bool

    # ------------------------------------------------------------------
    # File I/O
    # ------------------------------------------------------------------

    # Byte order used to read/write UTF-16 files ("little" | "big")
    utf16_byte_order: str

    def __post_init__(self) -> None:
        if self.utf16_byte_order not in UTF16_BYTE_ORDERS:
            raise ValueError(
                f"utf16_byte_order must be one of {UTF16_BYTE_ORDERS}, "
                f"got {self.utf16_byte_order!r}"
            )

    # ------------------------------------------------------------------
    # Factory
    # ------------------------------------------------------------------

    @staticmethod
    def load_from_env() -> AppConfig:
        """
        Load configuration from environment variables.

        Raises:
            ValueError if UTF16_BYTE_ORDER is not "little" or "big".
        """
        return AppConfig(
            env=os.environ.get("ENV", "dev"),
            log_level=os.environ.get("LOG_LEVEL", "INFO"),
            enable_json_logs=os.environ.get("ENABLE_JSON_LOGS", "1") == "1",
            utf16_byte_order=os.environ.get("UTF16_BYTE_ORDER", "little").lower(),
        )
