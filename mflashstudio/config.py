"""Application settings read from a TOML file."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any


@dataclass
class UiConfig:
    font_size_header: float = 40.0
    font_size_body: float = 22.0
    window_width: float = 900.0
    window_height: float = 600.0
    theme: str = "dark"


@dataclass
class AudioConfig:
    enabled: bool = True
    rate: float = 1.0


@dataclass
class PluginsConfig:
    enabled: list[str] = field(default_factory=list)


@dataclass
class WorkspacesConfig:
    show_deck: bool = True
    show_browse: bool = True
    show_visual_editor: bool = True
    show_media: bool = True
    show_schema_editor: bool = True


@dataclass
class ShortcutsConfig:
    next_card: str = "ArrowRight"
    prev_card: str = "ArrowLeft"
    next_list_item: str = "ArrowDown"
    prev_list_item: str = "ArrowUp"
    view_card: str = "Enter"
    back_to_list: str = "Escape"

    next_workspace: str = "Ctrl+Tab"
    prev_workspace: str = "Ctrl+Shift+Tab"
    workspace_deck: str = "Ctrl+1"
    workspace_browse: str = "Ctrl+2"
    workspace_visual_editor: str = "Ctrl+3"
    workspace_media: str = "Ctrl+4"
    workspace_schema_editor: str = "Ctrl+5"

    save_deck: str = "Ctrl+S"
    open_settings: str = "Ctrl+Comma"
    toggle_find: str = "Ctrl+F"
    exit_fullscreen: str = "F11"
    zoom_in: str = "Ctrl+Plus"
    zoom_out: str = "Ctrl+Minus"
    actual_size: str = "Ctrl+0"


def _check_value(value: Any, expected: Any, where: str) -> Any:
    if expected is bool:
        if not isinstance(value, bool):
            raise ValueError(f"{where} must be a boolean")
        return value
    if expected is float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"{where} must be a number")
        return float(value)
    if expected is str:
        if not isinstance(value, str):
            raise ValueError(f"{where} must be a string")
        return value
    if expected == list[str]:
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ValueError(f"{where} must be a list of strings")
        return list(value)
    raise TypeError(f"unsupported setting type for {where}")


def _build_section(section_cls: type, data: Any, name: str) -> Any:
    if not isinstance(data, Mapping):
        raise ValueError(f"[{name}] must be a table")
    values = {}
    for spec in fields(section_cls):
        if spec.name not in data:
            raise ValueError(f"[{name}] is missing `{spec.name}`")
        values[spec.name] = _check_value(data[spec.name], spec.type, f"{name}.{spec.name}")
    return section_cls(**values)


_FIELD_TYPES = {
    UiConfig: {"font_size_header": float, "font_size_body": float, "window_width": float,
               "window_height": float, "theme": str},
}


@dataclass
class AppConfig:
    """All settings; every section and key must be present in a file."""

    ui: UiConfig = field(default_factory=UiConfig)
    audio: AudioConfig = field(default_factory=AudioConfig)
    plugins: PluginsConfig = field(default_factory=PluginsConfig)
    workspaces: WorkspacesConfig = field(default_factory=WorkspacesConfig)
    shortcuts: ShortcutsConfig = field(default_factory=ShortcutsConfig)

    @classmethod
    def from_dict(cls, data: Any) -> "AppConfig":
        """Build settings from parsed TOML; raises ``ValueError`` if incomplete."""
        if not isinstance(data, Mapping):
            raise ValueError("configuration must be a table")
        sections = {}
        for spec in fields(cls):
            if spec.name not in data:
                raise ValueError(f"missing section [{spec.name}]")
            sections[spec.name] = _build_section(
                _SECTION_TYPES[spec.name], data[spec.name], spec.name
            )
        return cls(**sections)


_SECTION_TYPES: dict[str, type] = {
    "ui": UiConfig,
    "audio": AudioConfig,
    "plugins": PluginsConfig,
    "workspaces": WorkspacesConfig,
    "shortcuts": ShortcutsConfig,
}


def load_config(path: str = "config.toml") -> AppConfig:
    """Read settings from ``path``, falling back to defaults on any problem."""
    try:
        with open(path, "rb") as handle:
            data = tomllib.load(handle)
        return AppConfig.from_dict(data)
    except (OSError, ValueError):
        return AppConfig()