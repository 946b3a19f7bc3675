import os
from dataclasses import dataclass, field
from pathlib import Path

from boggle.tiles import DICE_SETS


@dataclass
class Settings:
    BASE_DIR: Path = field(default_factory=lambda: Path(__file__).resolve().parent.parent)

    DICTIONARY_PATH: Path = field(init=False)
    DICTIONARY_URL: str = ""
    DICTIONARY_TIMEOUT: float = 10.0

    MIN_WORD_LENGTH: int = 3
    GRID_SIZE: int = 4
    ROUND_SECONDS: int = 60
    MAX_MISSED: int = 0

    NTFY_TOPIC: str = ""
    NTFY_URL: str = "https://ntfy.sh"

    DEBUG: bool = False
    PORT: int = 10001

    def __post_init__(self):
        self.DICTIONARY_PATH = self.BASE_DIR / "words.txt"

        # Override from environment
        for fld in self.__dataclass_fields__:
            env_val = os.environ.get(fld)
            if env_val is not None:
                current = getattr(self, fld)
                if isinstance(current, bool):
                    setattr(self, fld, env_val.lower() in ("1", "true", "yes"))
                elif isinstance(current, int):
                    setattr(self, fld, int(env_val))
                elif isinstance(current, float):
                    setattr(self, fld, float(env_val))
                elif isinstance(current, Path):
                    setattr(self, fld, Path(env_val))
                else:
                    setattr(self, fld, env_val)


# Fields the HTTP API may change at runtime. They take effect on the next round.
EDITABLE_FIELDS: dict[str, type] = {
    "GRID_SIZE": int,
    "ROUND_SECONDS": int,
    "MIN_WORD_LENGTH": int,
    "MAX_MISSED": int,
    "NTFY_TOPIC": str,
    "DEBUG": bool,
}


def get_editable_settings(cfg: Settings) -> dict:
    return {name: getattr(cfg, name) for name in EDITABLE_FIELDS}


def _coerce(name: str, value, typ: type):
    if typ is bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.lower() in ("1", "true", "yes", "0", "false", "no"):
            return value.lower() in ("1", "true", "yes")
        raise ValueError(f"expected a boolean, got {value!r}")
    if typ is int:
        if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
            raise ValueError(f"expected an integer, got {value!r}")
        value = int(value)
        if value < 0:
            raise ValueError("must not be negative")
        if name == "GRID_SIZE" and value not in DICE_SETS:
            raise ValueError(f"no dice set for size {value}, choose from {sorted(DICE_SETS)}")
        if name == "MIN_WORD_LENGTH" and value < 1:
            raise ValueError("must be at least 1")
        return value
    if typ is float:
        return float(value)
    return str(value)


def update_settings(cfg: Settings, **values) -> dict[str, str]:
    """Apply editable values; returns per-field errors. Valid fields are applied even if others fail."""
    errors: dict[str, str] = {}
    for name, value in values.items():
        typ = EDITABLE_FIELDS.get(name)
        if typ is None:
            if name in cfg.__dataclass_fields__:
                errors[name] = "not editable"
            else:
                errors[name] = "unknown setting"
            continue
        try:
            setattr(cfg, name, _coerce(name, value, typ))
        except (TypeError, ValueError) as e:
            errors[name] = str(e)
    return errors


settings = Settings()
