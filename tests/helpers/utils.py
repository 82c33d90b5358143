import shutil
from datetime import date, timedelta
from pathlib import Path
from typing import Any, Optional

import yaml

# Fixed reference date so age arithmetic is reproducible.
AS_OF = date(2025, 6, 1)


def find_repo_root(start: Optional[Path] = None) -> Path:
    """
    Walk upwards to find the repo root (dir that has pyproject.toml or .git).
    """
    p = (start or Path(__file__).resolve()).parent
    for parent in [p, *p.parents]:
        if (parent / "pyproject.toml").exists() or (parent / ".git").exists():
            return parent

    return Path.cwd()


def data_dir() -> Path:
    """The catalog directory shipped inside the package."""
    return find_repo_root() / "src" / "pain_rulesets" / "data"


def load_yaml(path: Path | str) -> Any:
    if isinstance(path, str):
        path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing YAML file: {path}")
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def dump_yaml(path: Path, data: Any) -> None:
    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(data, f, allow_unicode=True, sort_keys=False)


def copy_catalog(dest: Path) -> Path:
    """Copy the shipped YAML catalog into *dest* so a test can edit it."""
    for src in data_dir().glob("*.yaml"):
        shutil.copy(src, dest / src.name)
    return dest


def born_days_ago(days: int, as_of: date = AS_OF) -> date:
    return as_of - timedelta(days=days)
