import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

STRATEGIES = ("trie", "filter")


@dataclass
class Settings:
    BASE_DIR: Path = field(default_factory=lambda: Path(__file__).resolve().parent.parent)

    DICTIONARY_PATH: Path = field(init=False)

    MIN_WORD_LENGTH: int = 4
    MAX_RESULTS: int = 50

    STRATEGY: str = "trie"
    PARALLEL: bool = False
    MAX_WORKERS: int = 0

    MAX_BOARD_SIZE: int = 16
    MAX_UPLOAD_BYTES: int = 5_000_000

    LOG_LEVEL: str = "INFO"
    CLI_LOG_LEVEL: str = "WARNING"
    DEBUG: bool = False
    PORT: int = 10001

    def __post_init__(self):
        self.DICTIONARY_PATH = self.BASE_DIR / "dictionary.txt"

        # Override from environment
        for fld in self.__dataclass_fields__:
            env_val = os.environ.get(fld)
            if env_val is not None:
                current = getattr(self, fld)
                if isinstance(current, bool):
                    setattr(self, fld, env_val.lower() in ("1", "true", "yes"))
                elif isinstance(current, int):
                    setattr(self, fld, int(env_val))
                elif isinstance(current, Path):
                    setattr(self, fld, Path(env_val))
                else:
                    setattr(self, fld, env_val)

        if self.STRATEGY not in STRATEGIES:
            raise ValueError(f"STRATEGY must be one of {STRATEGIES}, got {self.STRATEGY!r}")


def log_level(cfg: Settings, name: str | None = None) -> int:
    """Logging level for ``name`` (default ``cfg.LOG_LEVEL``); DEBUG wins when set."""
    if cfg.DEBUG:
        return logging.DEBUG
    return getattr(logging, (name or cfg.LOG_LEVEL).upper(), logging.INFO)


# Fields that may be changed at runtime through the settings API
EDITABLE_FIELDS: dict[str, type] = {
    "MIN_WORD_LENGTH": int,
    "MAX_RESULTS": int,
    "STRATEGY": str,
    "PARALLEL": bool,
    "MAX_WORKERS": int,
    "DEBUG": bool,
}


def get_editable_settings(cfg: Settings) -> dict:
    return {name: getattr(cfg, name) for name in EDITABLE_FIELDS}


def _coerce(value, typ: type):
    if typ is bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.lower() in ("1", "true", "yes", "0", "false", "no"):
            return value.lower() in ("1", "true", "yes")
        raise ValueError(f"expected a boolean, got {value!r}")
    if typ is int and isinstance(value, bool):
        raise ValueError(f"expected an integer, got {value!r}")
    return typ(value)


def update_settings(cfg: Settings, **values) -> dict[str, str]:
    """Apply ``values`` to ``cfg``. Returns an error message per rejected field.

    Valid fields are applied even when others are rejected.
    """
    errors: dict[str, str] = {}
    for name, value in values.items():
        typ = EDITABLE_FIELDS.get(name)
        if typ is None:
            errors[name] = "unknown field" if not hasattr(cfg, name) else "field is not editable"
            continue
        try:
            coerced = _coerce(value, typ)
        except (TypeError, ValueError) as e:
            errors[name] = str(e)
            continue
        if name == "STRATEGY" and coerced not in STRATEGIES:
            errors[name] = f"must be one of {', '.join(STRATEGIES)}"
            continue
        if name in ("MIN_WORD_LENGTH", "MAX_RESULTS", "MAX_WORKERS") and coerced < 0:
            errors[name] = "must not be negative"
            continue
        setattr(cfg, name, coerced)
    return errors


settings = Settings()
