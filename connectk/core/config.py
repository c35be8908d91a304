import os
import yaml
from pathlib import Path
from dotenv import load_dotenv
from pydantic import BaseModel, Field, model_validator
from typing import Optional

load_dotenv()

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config" / "engine.yaml"


class EngineConfig(BaseModel):
    # Board limits
    min_size: int = Field(4, ge=2)
    max_size: int = Field(20, ge=2)
    default_rows: int = 6
    default_cols: int = 7
    default_win_length: int = 4

    # Search
    max_positions: int = Field(12000, gt=1, description="Position budget used to size the look-ahead.")
    skill: float = Field(1.0, ge=0.0, le=1.0)
    seed: Optional[int] = None
    prune: bool = True

    log_level: str = "INFO"

    @model_validator(mode="after")
    def _check_limits(self):
        if self.min_size > self.max_size:
            raise ValueError(f"min_size ({self.min_size}) exceeds max_size ({self.max_size})")
        for name in ("default_rows", "default_cols"):
            value = getattr(self, name)
            if not self.min_size <= value <= self.max_size:
                raise ValueError(f"{name}={value} outside [{self.min_size}, {self.max_size}]")
        if not 2 <= self.default_win_length <= min(self.default_rows, self.default_cols):
            raise ValueError(f"default_win_length={self.default_win_length} does not fit the default board")
        return self


def get_config_path() -> Path:
    """Helper to resolve the YAML path, honouring CONNECTK_CONFIG."""
    override = os.getenv("CONNECTK_CONFIG")
    return Path(override) if override else DEFAULT_CONFIG_PATH


def load_config(path: Optional[str | Path] = None) -> EngineConfig:
    """
    Reads the YAML file and flattens its sections into an EngineConfig.
    Unknown sections are ignored; missing keys fall back to model defaults.
    """
    path = Path(path) if path else get_config_path()
    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}

    flat = {}
    for key, val in data.items():
        if isinstance(val, dict):
            flat.update(val)
        else:
            flat[key] = val
    return EngineConfig(**flat)


# Singleton instance
settings = load_config()
