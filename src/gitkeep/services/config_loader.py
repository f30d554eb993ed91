# File: src/gitkeep/services/config_loader.py

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional
import yaml
from ..const import CONFIG_FILENAME, DEFAULT_EXCLUDE_DIRS, GITKEEP_FILENAME
from ..domain import Config, Mode
from ..errors import ConfigError

logger = logging.getLogger("gitkeep")

DEFAULTS: Dict[str, Any] = {
    "dryRun": False,
    "verbose": False,
    "reportFile": None,
    "content": "",
    "clean": False,
    "check": False,
    "excludeDirs": DEFAULT_EXCLUDE_DIRS,
    "gitkeepName": GITKEEP_FILENAME,
    "respectGitkeepIgnore": True,
}

BOOL_KEYS = {"dryRun", "verbose", "clean", "check", "respectGitkeepIgnore"}
STR_KEYS = {"content", "gitkeepName"}


class ConfigLoader:
    """
    Merges defaults, the project's .gitkeepcfg and CLI overrides (in that order
    of increasing priority) into one immutable Config.
    """

    def load(self, root: str, overrides: Optional[Dict[str, Any]] = None) -> Config:
        root_path = Path(root).resolve()
        file_settings = self.load_file(root_path / CONFIG_FILENAME)
        cli_settings = {k: v for k, v in (overrides or {}).items() if v is not None}

        self._validate_keys(cli_settings, set(DEFAULTS), "CLI overrides")

        merged = {**DEFAULTS, **file_settings, **cli_settings}
        self._validate_types(merged)
        return self._build(root_path, merged)

    def load_file(self, path: Path) -> Dict[str, Any]:
        if not os.path.exists(path):
            return {}

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid syntax in {path}: {e}")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"Cannot read {path}: {e}")

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"{path} must contain a mapping, got {type(data).__name__}")

        self._validate_keys(data, set(DEFAULTS), CONFIG_FILENAME)
        logger.debug(f"Loaded configuration from {path}")
        return data

    def _build(self, root: Path, settings: Dict[str, Any]) -> Config:
        if settings["clean"]:
            mode = Mode.CLEAN
            if settings["check"]:
                logger.warning("Both clean and check are set; clean takes precedence.")
        elif settings["check"]:
            mode = Mode.CHECK
        else:
            mode = Mode.NORMAL

        return Config(
            root=root,
            mode=mode,
            dry_run=settings["dryRun"],
            marker_name=settings["gitkeepName"],
            marker_content=settings["content"],
            exclude_dirs=frozenset(settings["excludeDirs"]),
            respect_marker_ignore=settings["respectGitkeepIgnore"],
            verbose=settings["verbose"],
            report_file=settings["reportFile"],
        )

    def _validate_keys(self, data: dict, valid: set, name: str):
        unknown = set(data.keys()) - valid
        if unknown:
            raise ConfigError(f"{name} has unknown keys: {sorted(unknown)}. Valid: {sorted(valid)}")

    def _validate_types(self, settings: Dict[str, Any]):
        for key in BOOL_KEYS:
            if not isinstance(settings[key], bool):
                raise ConfigError(f"'{key}' must be true or false, got {settings[key]!r}")

        for key in STR_KEYS:
            if not isinstance(settings[key], str):
                raise ConfigError(f"'{key}' must be a string, got {settings[key]!r}")

        report = settings["reportFile"]
        if report is not None and not isinstance(report, str):
            raise ConfigError(f"'reportFile' must be a string, got {report!r}")

        dirs = settings["excludeDirs"]
        if not isinstance(dirs, list) or not all(isinstance(d, str) for d in dirs):
            raise ConfigError(f"'excludeDirs' must be a list of directory names, got {dirs!r}")

        name = settings["gitkeepName"]
        if not name or "/" in name or "\\" in name or name in (".", ".."):
            raise ConfigError(f"'gitkeepName' must be a plain file name, got {name!r}")
