"""Runtime configuration for browser sessions and page snapshots.

Values are plain data read once at construction time; nothing here talks to
the browser. ``load_config`` accepts the camelCase keys written by the
original desktop tool as well as snake_case keys.
"""
import json
import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

log = logging.getLogger(__name__)


class SaveAs(Enum):
    """Snapshot output format."""
    PDF = "pdf"
    HTML = "html"


@dataclass(frozen=True)
class UserConfig:
    headless: bool = True
    save_as: SaveAs = SaveAs.PDF


@dataclass(frozen=True)
class Configuration:
    """Settings shared by a BrowserManager and every Tab it hands out.

    ``http_timeout`` and both delays are in seconds.
    """
    root_dir: str
    user_config: UserConfig = field(default_factory=UserConfig)
    http_timeout: float = 30.0
    html_settle_delay: float = 5.0
    image_apply_delay: float = 2.0

    @property
    def user_data_dir(self) -> str:
        return self.root_dir + "/data"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Configuration":
        user = _pick(data, "userConfig", "user_config") or {}
        save_as = _pick(user, "saveAs", "save_as")
        user_config = UserConfig(
            headless=_parse_bool(_pick(user, "headless", default=True), "headless"),
            save_as=SaveAs(str(save_as).lower()) if save_as else SaveAs.PDF,
        )

        root_dir = _pick(data, "rootDir", "root_dir")
        if not root_dir:
            raise ValueError("configuration is missing rootDir")

        return cls(
            root_dir=str(root_dir),
            user_config=user_config,
            http_timeout=float(_pick(data, "httpTimeout", "http_timeout", default=30.0)),
            html_settle_delay=float(
                _pick(data, "htmlSettleDelay", "html_settle_delay", default=5.0)
            ),
            image_apply_delay=float(
                _pick(data, "imageApplyDelay", "image_apply_delay", default=2.0)
            ),
        )


_TRUE_STRINGS = ("true", "1", "yes", "on")
_FALSE_STRINGS = ("false", "0", "no", "off")


def _parse_bool(value: Any, name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise ValueError(f"configuration value {name}={value!r} is not a boolean")


def _pick(data: dict, *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


def load_config(path: str) -> Configuration:
    """Load a Configuration from a JSON file.

    A relative ``rootDir`` is resolved against the directory holding the file.
    Missing files and malformed JSON raise.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    root_dir = _pick(data, "rootDir", "root_dir")
    if root_dir and not os.path.isabs(root_dir):
        base = os.path.dirname(os.path.abspath(path))
        data = {**data, "rootDir": os.path.normpath(os.path.join(base, root_dir))}
        data.pop("root_dir", None)

    config = Configuration.from_dict(data)
    log.debug(f"Loaded configuration from {path} (save_as={config.user_config.save_as.value})")
    return config
