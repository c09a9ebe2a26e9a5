#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Time-stamp: <2026-10-18 17:20:04 krylon>
#
# /data/code/python/modescan/config.py
# created on 14. 10. 2026
# (c) 2026 Benjamin Walkenhorst
#
# This file is part of the modescan port scanner. It is distributed under the
# terms of the GNU General Public License 3. See the file LICENSE for details
# or find a copy online at https://www.gnu.org/licenses/gpl-3.0

"""
modescan.config

(c) 2026 Benjamin Walkenhorst

The configuration file lives at common.path.config and looks like this:

    [scanner]
    workers = 200
    timeout = 0.5
    service_detection = true
    report_dir = "/home/me/scans"

    [resolver]
    timeout = 2.5
    lifetime = 2.5

Every key is optional.
"""

import logging
import pathlib
import tomllib
from typing import Any, Final, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError
from pydantic import field_validator

from modescan import common
from modescan.common import ConfigError

default_workers: Final[int] = 200
default_timeout: Final[float] = 0.5
default_resolver_timeout: Final[float] = 2.5

# Where each option lives in the configuration file.
_options: Final[dict[tuple[str, str], str]] = {
    ("scanner", "workers"): "workers",
    ("scanner", "timeout"): "timeout",
    ("scanner", "service_detection"): "service_detection",
    ("scanner", "report_dir"): "report_dir",
    ("resolver", "timeout"): "resolver_timeout",
    ("resolver", "lifetime"): "resolver_lifetime",
}


def _describe(err: PydanticValidationError) -> str:
    msgs: list[str] = []
    for e in err.errors():
        loc = ".".join(str(x) for x in e["loc"])
        msgs.append(f"{loc}: {e['msg']} (got {e.get('input')!r})")
    return "; ".join(msgs)


class Config(BaseModel):
    """Config holds the tunables of the scanner.

    Values are checked when a Config is created and whenever an attribute
    is assigned, so the configuration file and the command line obey the
    same rules.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    workers: int = Field(default_workers, ge=1, strict=True)
    timeout: float = Field(default_timeout, gt=0, allow_inf_nan=False, strict=True)
    service_detection: bool = Field(True, strict=True)
    report_dir: pathlib.Path = Field(default_factory=lambda: common.path.reports)
    resolver_timeout: float = Field(default_resolver_timeout,
                                    gt=0,
                                    allow_inf_nan=False,
                                    strict=True)
    resolver_lifetime: float = Field(default_resolver_timeout,
                                     gt=0,
                                     allow_inf_nan=False,
                                     strict=True)

    @field_validator("report_dir", mode="before")
    @classmethod
    def _expand_home(cls, val: Any) -> Any:
        if isinstance(val, str):
            return pathlib.Path(val).expanduser()
        if not isinstance(val, pathlib.Path):
            raise ValueError("must be a string")
        return val

    def update(self, **changes: Any) -> None:
        """Override the given options, e.g. from the command line.

        Raise ConfigError if any of the new values is not acceptable. In that
        case, the Config is left unchanged.
        """
        merged: Final[dict[str, Any]] = self.model_dump()
        merged.update(changes)
        try:
            checked: Final[Config] = Config.model_validate(merged)
        except PydanticValidationError as err:
            raise ConfigError(_describe(err)) from err
        for key in changes:
            setattr(self, key, getattr(checked, key))

    @classmethod
    def load(cls, path: Optional[Union[str, pathlib.Path]] = None) -> 'Config':
        """Load the configuration file. If it does not exist, return the defaults."""
        log: Final[logging.Logger] = common.get_logger("config")
        cfg_path: Final[pathlib.Path] = \
            common.path.config if path is None else pathlib.Path(path)

        if not cfg_path.is_file():
            log.debug("No configuration file at %s, using defaults.", cfg_path)
            return cls()

        try:
            with open(cfg_path, "rb") as fh:
                data: dict[str, Any] = tomllib.load(fh)
        except tomllib.TOMLDecodeError as err:
            raise ConfigError(f"Cannot parse {cfg_path}: {err}") from err

        values: dict[str, Any] = {}
        for section, table in data.items():
            if not isinstance(table, dict):
                raise ConfigError(f"{section} in {cfg_path} must be a table")
            for key, val in table.items():
                match _options.get((section, key)):
                    case None:
                        log.warning("Ignoring unknown configuration option %s.%s in %s",
                                    section,
                                    key,
                                    cfg_path)
                    case name:
                        values[name] = val

        try:
            cfg: Final[Config] = cls.model_validate(values)
        except PydanticValidationError as err:
            raise ConfigError(f"Invalid configuration in {cfg_path}: {_describe(err)}") \
                from err

        log.debug("Loaded configuration from %s: %s", cfg_path, cfg)
        return cfg


# Local Variables: #
# python-indent: 4 #
# End: #
