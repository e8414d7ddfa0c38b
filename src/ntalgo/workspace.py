from __future__ import annotations

import os
import shutil
from importlib.resources import as_file
from importlib.resources import files as pkg_files
from pathlib import Path


def workspace_dir() -> Path:
    env = os.environ.get("NTALGO_HOME")
    if env:
        return Path(env).expanduser().resolve()
    return (Path.home() / ".ntalgo").resolve()


def profiles_dir() -> Path:
    return workspace_dir() / "profiles"


def packaged_profile(name: str) -> Path | None:
    """Filesystem path of a profile shipped inside the package, or None."""
    ref = pkg_files("ntalgo") / "profiles" / f"{name}.toml"
    if not ref.is_file():
        return None
    with as_file(ref) as real:
        return Path(real)


def seed_profiles(*, overwrite: bool = False) -> tuple[Path, int]:
    """
    Copy the packaged *.toml profiles into <workspace>/profiles.

    overwrite=False → copy-if-missing
    Returns: (profiles_dir, files_copied)
    """
    dst = profiles_dir()
    dst.mkdir(parents=True, exist_ok=True)
    copied = 0
    with as_file(pkg_files("ntalgo") / "profiles") as src:
        for p in Path(src).glob("*.toml"):
            target = dst / p.name
            if overwrite or not target.exists():
                shutil.copy2(p, target)
                copied += 1
    return dst, copied
