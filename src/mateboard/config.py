"""Runtime settings for the command-line tools."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

_ENV_PREFIX = "MATEBOARD_"
_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})


def _env_flag(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(_ENV_PREFIX + name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean for {_ENV_PREFIX + name}: {raw!r}")


@dataclass
class Settings:
    """Validation and logging options.

    ``dev_mode`` withholds puzzles that fail validation from play; it is
    passed explicitly to the code that needs it, never read globally.
    """

    log_level: str = "WARNING"
    dev_mode: bool = False
    run_self_test: bool = True
    verbose: bool = False

    def __post_init__(self) -> None:
        self.log_level = self.log_level.upper()
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Unknown log level: {self.log_level!r}")

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> Settings:
        """Read ``MATEBOARD_*`` variables, falling back to the defaults."""
        env = os.environ if env is None else env
        defaults = cls()
        return cls(
            log_level=env.get(_ENV_PREFIX + "LOG_LEVEL", defaults.log_level),
            dev_mode=_env_flag(env, "DEV_MODE", defaults.dev_mode),
            run_self_test=_env_flag(env, "SELF_TEST", defaults.run_self_test),
            verbose=_env_flag(env, "VERBOSE", defaults.verbose),
        )
