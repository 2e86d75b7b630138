from __future__ import annotations

import tomllib as toml
from dataclasses import dataclass
from importlib.resources import files as pkg_files
from pathlib import Path
from typing import Any

from bankbalance.utility import UserInputError

DEFAULT_PROFILE = "default.toml"


@dataclass
class Settings:
    """
    Wrap the full TOML dict (without the [PROFILE] section).
    .as_dict() feeds runtime.apply().

      - name:        profile name from [PROFILE], else the file stem
      - description: one-line description from [PROFILE] or "(no description)"
    """
    data: dict[str, Any]
    name: str
    description: str
    _source: Path | None = None

    def as_dict(self) -> dict[str, Any]:
        return self.data


# --- I/O -------------------------------------------------------------------


def _parse_toml(text: str, label: str) -> dict[str, Any]:
    try:
        return toml.loads(text)
    except toml.TOMLDecodeError as e:
        lineno = getattr(e, "lineno", None)
        colno = getattr(e, "colno", None)
        msg = getattr(e, "msg", str(e))
        where = []
        if lineno is not None:
            where.append(f"line {lineno}")
        if colno is not None:
            where.append(f"column {colno}")
        loc = f" (at {', '.join(where)})" if where else ""
        # No traceback chaining
        raise UserInputError(f"reading {label}: {msg}{loc}.") from None


def _split_profile_data(raw: dict[str, Any], fallback_name: str) -> tuple[dict[str, Any], str, str]:
    """
    Extract [PROFILE] meta (name, description) and return:
      (settings_without_profile, resolved_name, resolved_description)
    """
    meta = raw.get("PROFILE") or {}
    data = {k: v for k, v in raw.items() if k != "PROFILE"}

    name = str(meta.get("name") or fallback_name)
    description = " ".join(str(meta.get("description") or "").split()) or "(no description)"
    return data, name, description


# --- Public API ------------------------------------------------------------


def default_profile_text() -> str:
    return pkg_files("bankbalance").joinpath("profiles", DEFAULT_PROFILE).read_text(encoding="utf-8")


def load_settings(path: str | Path | None = None) -> Settings:
    """
    Load a TOML profile from `path`, or the packaged default profile.
    Values missing from a user profile fall back to the defaults.
    """
    defaults = _parse_toml(default_profile_text(), DEFAULT_PROFILE)

    if path is None:
        data, name, description = _split_profile_data(defaults, "default")
        return Settings(data=data, name=name, description=description)

    p = Path(path).expanduser()
    if not p.is_file():
        raise UserInputError(f"Profile file not found: {p}")
    raw = _parse_toml(p.read_text(encoding="utf-8"), p.name)
    data, name, description = _split_profile_data(raw, p.stem)

    merged, _, _ = _split_profile_data(defaults, "default")
    for section, values in data.items():
        if isinstance(values, dict) and isinstance(merged.get(section), dict):
            merged[section] = {**merged[section], **values}
        else:
            merged[section] = values

    return Settings(data=merged, name=name, description=description, _source=p)
