"""
Box calc defaults persistence (platformdirs + JSON).

Persisted items (schema v1):
- quartilemethod: default QuartileMethod value for raw-sample traces
- boxpoints: default PointsMode value for raw-sample traces
- notched: default notch flag for raw-sample traces

Behavior:
- If config file missing or unreadable -> defaults are used
- If schema_version mismatches:
  - default: reset to defaults
  - optional: keep loaded but update version
- Unknown keys in loaded JSON are ignored with warnings
- Invalid enum values are replaced by their defaults with warnings
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from platformdirs import user_config_dir

from boxcalc.utils.logging import get_logger
from boxcalc.box_stats.trace_state import PointsMode, QuartileMethod

logger = get_logger(__name__)

# Increment when you make a breaking change to the on-disk JSON schema.
SCHEMA_VERSION: int = 1


@dataclass
class BoxCalcDefaults:
    """
    JSON-serializable defaults applied by supply_defaults() to unset options.
    """
    schema_version: int = SCHEMA_VERSION
    quartilemethod: QuartileMethod = QuartileMethod.LINEAR
    boxpoints: PointsMode = PointsMode.OUTLIERS
    notched: bool = False

    def to_json_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "schema_version": self.schema_version,
            "quartilemethod": self.quartilemethod.value,
            "boxpoints": self.boxpoints.value,
            "notched": self.notched,
        }

    @classmethod
    def from_json_dict(cls, d: Dict[str, Any]) -> "BoxCalcDefaults":
        """
        Tolerant loader:
        - ignores unknown keys
        - tolerates partially missing or invalid values
        """
        schema_version = int(d.get("schema_version", -1))

        quartilemethod = QuartileMethod.LINEAR
        if "quartilemethod" in d:
            try:
                quartilemethod = QuartileMethod(d["quartilemethod"])
            except ValueError:
                logger.warning(f"Unknown quartilemethod {d['quartilemethod']!r} in box calc config, using 'linear'")

        boxpoints = PointsMode.OUTLIERS
        if "boxpoints" in d:
            try:
                boxpoints = PointsMode.parse(d["boxpoints"])
            except ValueError:
                logger.warning(f"Unknown boxpoints {d['boxpoints']!r} in box calc config, using 'outliers'")

        notched = bool(d.get("notched", False))

        known_keys = {"schema_version", "quartilemethod", "boxpoints", "notched"}
        for key in d.keys():
            if key not in known_keys:
                logger.warning(f"Unknown key '{key}' in box calc config, ignoring")

        return cls(
            schema_version=schema_version,
            quartilemethod=quartilemethod,
            boxpoints=boxpoints,
            notched=notched,
        )


class BoxCalcConfig:
    """
    Manager for loading/saving BoxCalcDefaults to disk.
    """

    def __init__(self, *, path: Path, data: Optional[BoxCalcDefaults] = None):
        self.path = path
        self.data = data if data is not None else BoxCalcDefaults()

    @staticmethod
    def default_config_path(
        app_name: str = "boxcalc",
        filename: str = "box_calc_config.json",
        app_author: str | None = None,
    ) -> Path:
        """
        Determine OS-appropriate per-user config path.

        macOS:   ~/Library/Application Support/boxcalc/box_calc_config.json
        Linux:   ~/.config/boxcalc/box_calc_config.json
        Windows: %APPDATA%\\boxcalc\\box_calc_config.json
        """
        d = Path(user_config_dir(app_name, app_author))
        d.mkdir(parents=True, exist_ok=True)
        return d / filename

    @classmethod
    def load(
        cls,
        *,
        config_path: Optional[Path] = None,
        app_name: str = "boxcalc",
        filename: str = "box_calc_config.json",
        app_author: str | None = None,
        schema_version: int = SCHEMA_VERSION,
        reset_on_version_mismatch: bool = True,
        create_if_missing: bool = False,
    ) -> "BoxCalcConfig":
        """
        Load config from disk.

        If file doesn't exist or is unreadable -> defaults.
        If schema mismatch:
          - reset_on_version_mismatch=True -> defaults
          - else -> keep loaded but overwrite schema_version

        If create_if_missing=True and file is missing -> immediately write defaults.
        """
        path = config_path or cls.default_config_path(app_name=app_name, filename=filename, app_author=app_author)
        default_data = BoxCalcDefaults(schema_version=schema_version)

        try:
            raw = path.read_text(encoding="utf-8")
            parsed = json.loads(raw)
            if not isinstance(parsed, dict):
                logger.warning(f"Box calc config file at {path} does not contain a dict, using defaults")
                return cls(path=path, data=default_data)

            loaded = BoxCalcDefaults.from_json_dict(parsed)

            if int(loaded.schema_version) != int(schema_version):
                if reset_on_version_mismatch:
                    logger.warning(
                        f"Box calc config schema version mismatch: loaded={loaded.schema_version}, "
                        f"expected={schema_version}, resetting to defaults"
                    )
                    cfg = cls(path=path, data=default_data)
                    if create_if_missing:
                        cfg.save()
                    return cfg
                loaded.schema_version = int(schema_version)

            return cls(path=path, data=loaded)
        except FileNotFoundError:
            logger.debug(f"Box calc config file not found at {path}, using defaults")
            cfg = cls(path=path, data=default_data)
            if create_if_missing:
                cfg.save()
            return cfg
        except json.JSONDecodeError as e:
            logger.warning(f"Box calc config file at {path} is not valid JSON: {e}, using defaults")
            return cls(path=path, data=default_data)
        except OSError as e:
            logger.warning(f"Error reading box calc config from {path}: {e}, using defaults")
            return cls(path=path, data=default_data)

    def save(self) -> None:
        """Write config to disk."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            json_str = json.dumps(self.data.to_json_dict(), indent=2)
            self.path.write_text(json_str, encoding="utf-8")
            logger.info(f"Saved box calc config to {self.path}")
        except Exception as e:
            logger.error(f"Error saving box calc config to {self.path}: {e}")
            raise

    def get_defaults(self) -> BoxCalcDefaults:
        """Get the calc defaults held by this config."""
        return self.data

    def set_quartilemethod(self, method: QuartileMethod) -> None:
        self.data.quartilemethod = method

    def set_boxpoints(self, mode: PointsMode) -> None:
        self.data.boxpoints = mode

    def set_notched(self, notched: bool) -> None:
        self.data.notched = bool(notched)
