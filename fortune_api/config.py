from __future__ import annotations

import os
from typing import Literal, Mapping, Optional

from pydantic import BaseModel, Field, IPvAnyAddress


class Settings(BaseModel):
    """Runtime settings, read from environment variables."""

    host: IPvAnyAddress = Field(default="127.0.0.1", validate_default=True)
    port: int = Field(default=8080, ge=0, le=65535)
    fortune_dir: str = "/usr/share/fortune"
    fortune_command: str = "fortune"
    # 0 disables the limit
    fortune_timeout: float = Field(default=5.0, ge=0)
    strict_categories: bool = True
    keepalive_timeout: int = Field(default=5, ge=0)
    log_level: Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"] = "INFO"
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from ``environ`` (``os.environ`` by default).

        Raises ``pydantic.ValidationError`` when a value does not parse.
        """
        env = os.environ if environ is None else environ
        return cls(
            host=env.get("MY_APP_HOST", "127.0.0.1"),
            port=env.get("MY_APP_PORT", "8080"),
            fortune_dir=env.get("FORTUNE_DIR", "/usr/share/fortune"),
            fortune_command=env.get("FORTUNE_COMMAND", "fortune"),
            fortune_timeout=env.get("FORTUNE_TIMEOUT", "5.0"),
            strict_categories=env.get("FORTUNE_STRICT_CATEGORIES", "true").strip(),
            keepalive_timeout=env.get("FORTUNE_KEEPALIVE_TIMEOUT", "5"),
            log_level=env.get("LOG_LEVEL", "INFO").strip().upper(),
            log_file=env.get("LOG_FILE") or None,
        )

    @property
    def subprocess_timeout(self) -> Optional[float]:
        return self.fortune_timeout or None
