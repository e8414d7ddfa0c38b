from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomllib as toml

from ntalgo.utility import UserInputError
from ntalgo.workspace import packaged_profile, profiles_dir

# Keys whose values must be non-negative integers
_INT_KEYS = {
    "FACTORING": ("MAX_ITER", "MAX_INNER_ITER", "SLOW_THRESHOLD"),
}


@dataclass
class Settings:
    """
    Wrap the full TOML dict (without the [_PROFILE_] section).
    .as_dict() feeds runtime.apply().

      - name:        resolved profile name (file stem if [_PROFILE_] has none)
      - description: one-line description from [_PROFILE_] or "(no description)"
    """
    data: dict[str, Any]
    name: str
    description: str
    _source: Path | None = None

    def as_dict(self) -> dict[str, Any]:
        return self.data


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return toml.load(f)
    except Exception as e:
        lineno = getattr(e, "lineno", None)
        colno = getattr(e, "colno", None)
        msg = getattr(e, "msg", str(e))
        where = []
        if lineno is not None:
            where.append(f"line {lineno}")
        if colno is not None:
            where.append(f"column {colno}")
        loc = f" (at {', '.join(where)})" if where else ""
        raise UserInputError(f"reading {path.name}: {msg}{loc}.") from None


def _split_profile_data(raw: dict[str, Any], fallback_name: str) -> tuple[dict[str, Any], str, str]:
    meta = raw.get("_PROFILE_") or {}
    data = {k: v for k, v in raw.items() if k != "_PROFILE_"}
    name = str(meta.get("name") or fallback_name)
    description = " ".join(str(meta.get("description") or "").split()) or "(no description)"
    return data, name, description


def _validate(data: dict[str, Any], source: Path) -> None:
    for section, keys in _INT_KEYS.items():
        sec = data.get(section)
        if sec is None:
            continue
        if not isinstance(sec, dict):
            raise UserInputError(f"{source.name}: [{section}] must be a table.")
        for key in keys:
            if key not in sec:
                continue
            v = sec[key]
            if isinstance(v, bool) or not isinstance(v, int) or v < 0:
                raise UserInputError(
                    f"{source.name}: {section}.{key} must be a non-negative integer, got {v!r}."
                )
    dbg = (data.get("BEHAVIOUR") or {}).get("DEBUG")
    if dbg is not None and not isinstance(dbg, bool):
        raise UserInputError(f"{source.name}: BEHAVIOUR.DEBUG must be true or false.")


def resolve_profile(name: str) -> Path:
    """Workspace profile first, then the packaged one."""
    user = profiles_dir() / f"{name}.toml"
    if user.exists():
        return user
    shipped = packaged_profile(name)
    if shipped is not None:
        return shipped
    raise FileNotFoundError(f"Profile '{name}' not found in {profiles_dir()} or the package")


def list_profiles() -> list[str]:
    names = {p.stem for p in profiles_dir().glob("*.toml")} if profiles_dir().exists() else set()
    if packaged_profile("default") is not None:
        names.add("default")
    return sorted(names)


def load_settings(name: str | None = None) -> Settings:
    """
    Load a profile by name (default 'default') and return
    Settings(data=..., name=..., description=..., _source=path).
    """
    if not name:
        name = "default"
    path = resolve_profile(name)
    return load_settings_file(path)


def load_settings_file(path: Path) -> Settings:
    raw = _load_toml(path)
    data, resolved_name, description = _split_profile_data(raw, path.stem)
    _validate(data, path)
    return Settings(
        data=data,
        name=resolved_name,
        description=description,
        _source=path,
    )
