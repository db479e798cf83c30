#
# config/models.py
#
"""
Attrs-based data models for seatbelt configuration structure.
"""

import logging
from pathlib import Path
from typing import Any

from attrs import define, field

from seatbelt.rules import DEFAULT_MINIMUM_PASS_THRESHOLD


# --- Validators ---
def _validate_log_level(inst: Any, attr: Any, value: str) -> None:
    """Validator for standard logging level names."""
    valid = logging.getLevelNamesMapping().keys()
    if value.upper() not in valid:
        raise ValueError(f"Invalid log_level '{value}'. Must be one of {list(valid)}.")


def _validate_non_negative_int(inst: Any, attr: Any, value: int) -> None:
    """Validator ensures integer is zero or positive."""
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise ValueError(f"Field '{attr.name}' must be a non-negative integer, got {value!r}")


def _validate_non_negative_number(inst: Any, attr: Any, value: float) -> None:
    if not isinstance(value, int | float) or isinstance(value, bool) or value < 0:
        raise ValueError(f"Field '{attr.name}' must be a non-negative number, got {value!r}")


def _validate_suffix(inst: Any, attr: Any, value: str) -> None:
    if not value.startswith("."):
        raise ValueError(f"Field '{attr.name}' must start with '.', got {value!r}")


# --- Section models ---
@define(frozen=True, slots=True)
class RunnerConfig:
    """How test modules are found and judged."""

    library: str = field(default="unittest")
    minimum_pass_threshold: int = field(
        default=DEFAULT_MINIMUM_PASS_THRESHOLD, validator=_validate_non_negative_int
    )
    # Directory placed on sys.path; module refs are relative to it.
    source_root: Path = field(default=Path("tests"), converter=Path)
    test_glob: str = field(default="**/test_*.py")
    module_suffix: str = field(default=".py", validator=_validate_suffix)


@define(frozen=True, slots=True)
class WatchConfig:
    """File-watching settings used by watch mode."""

    patterns: tuple[str, ...] = field(default=("*.py",), converter=tuple)
    ignore_patterns: tuple[str, ...] = field(
        default=("*/.git/*", "*/__pycache__/*", "*/.venv/*"), converter=tuple
    )
    debounce_seconds: float = field(default=0.25, validator=_validate_non_negative_number)


@define(frozen=True, slots=True)
class GlobalConfig:
    """Global default settings for seatbelt."""

    log_level: str = field(default="WARNING", validator=_validate_log_level)


@define(frozen=True, slots=True)
class SeatbeltConfig:
    """Root configuration object for the seatbelt application."""

    project_root: Path = field(factory=Path.cwd, converter=Path)
    global_config: GlobalConfig = field(factory=GlobalConfig, metadata={"toml_name": "global"})
    runner: RunnerConfig = field(factory=RunnerConfig)
    watch: WatchConfig = field(factory=WatchConfig)
    config_file_path: Path | None = field(default=None)

    @property
    def source_root(self) -> Path:
        """Absolute directory holding the test modules."""
        root = self.runner.source_root
        return root if root.is_absolute() else self.project_root / root

    @property
    def module_depth(self) -> int:
        """Number of leading path segments (relative to the project root) dropped when naming modules."""
        try:
            return len(self.source_root.relative_to(self.project_root).parts)
        except ValueError:
            return 0

    @property
    def module_anchor(self) -> tuple[Path, int]:
        """Directory that file paths are made relative to, and how many segments to drop after that."""
        if self.source_root.is_relative_to(self.project_root):
            return self.project_root, self.module_depth
        return self.source_root, 0


# 🔼⚙️
