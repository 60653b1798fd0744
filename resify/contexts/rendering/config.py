"""
Render Configuration

Settings for a render run, resolved in order (later wins):
1. Defaults, some taken from the environment (.env is loaded)
2. An optional YAML config file
3. Explicit overrides, typically CLI flags

Examples:
    >>> config = load_render_config(text=True)
    >>> config = load_render_config(Path("resify.yaml"), template="cv.tem")
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

load_dotenv()


@dataclass
class RenderConfig:
    """
    Attributes:
        data_dir: Directory containing templates and embeddable files
        template: Main template to execute for each record
        text: Render plain text (no HTML escaping)
        newline: Write a trailing newline after each rendered record
        log_dir: Directory for the DEBUG file log (None for console only)
    """

    data_dir: str = field(default_factory=lambda: os.getenv("RESIFY_DATA_DIR", "templates"))
    template: str = field(default_factory=lambda: os.getenv("RESIFY_TEMPLATE", "index.tem"))
    text: bool = False
    newline: bool = True
    log_dir: Optional[str] = field(default_factory=lambda: os.getenv("RESIFY_LOGS_PATH"))

    @property
    def data_path(self) -> Path:
        return Path(self.data_dir)

    @property
    def log_path(self) -> Optional[Path]:
        return Path(self.log_dir) if self.log_dir else None


def load_render_config(config_path: Optional[Path] = None, **overrides: Any) -> RenderConfig:
    """
    Resolve render settings from defaults, a config file and overrides.

    Args:
        config_path: Optional YAML file with any RenderConfig keys
        **overrides: Explicit values; None means "not given" and is skipped

    Returns:
        Resolved RenderConfig

    Raises:
        FileNotFoundError: If config_path does not exist
        omegaconf.errors.ValidationError: If a value has the wrong type
        omegaconf.errors.ConfigKeyError: If a key is not a RenderConfig field
    """
    schema = OmegaConf.structured(RenderConfig)
    layers = [schema]

    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        layers.append(OmegaConf.load(config_path))

    given = {key: value for key, value in overrides.items() if value is not None}
    if given:
        layers.append(OmegaConf.create({k: str(v) if isinstance(v, Path) else v for k, v in given.items()}))

    merged = OmegaConf.merge(*layers)
    return OmegaConf.to_object(merged)
