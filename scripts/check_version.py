#!/usr/bin/env python3
"""Validate version consistency between the package and pyproject.toml.

Exit codes:
    0: Versions match
    1: Version mismatch or error
"""

from __future__ import annotations

import re
import sys
import tomllib
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
INIT_FILE = PROJECT_ROOT / "src" / "authflow" / "__init__.py"
CONFIG_FILE = PROJECT_ROOT / "src" / "authflow" / "config.py"
PYPROJECT_FILE = PROJECT_ROOT / "pyproject.toml"


def read_assignment(path: Path, pattern: str) -> str | None:
    """Return the first quoted value assigned by ``pattern`` in a file."""
    content = path.read_text(encoding="utf-8")
    match = re.search(pattern + r"""\s*=\s*["']([^"']+)["']""", content, re.MULTILINE)
    return match.group(1) if match else None


def get_pyproject_version(pyproject_file: Path) -> str | None:
    try:
        data = tomllib.loads(pyproject_file.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError:
        return None
    return data.get("project", {}).get("version")


def main() -> int:
    for path in (INIT_FILE, CONFIG_FILE, PYPROJECT_FILE):
        if not path.exists():
            print(f"❌ Error: {path} not found", file=sys.stderr)
            return 1

    versions = {
        "src/authflow/__init__.py": read_assignment(INIT_FILE, r"^__version__"),
        "src/authflow/config.py (app_version)": read_assignment(
            CONFIG_FILE, r"^\s*app_version:\s*str"
        ),
        "pyproject.toml": get_pyproject_version(PYPROJECT_FILE),
    }

    missing = [name for name, version in versions.items() if version is None]
    if missing:
        print(f"❌ Error: could not find a version in {', '.join(missing)}", file=sys.stderr)
        return 1

    if len(set(versions.values())) > 1:
        print("❌ Version mismatch detected!", file=sys.stderr)
        for name, version in versions.items():
            print(f"   {name}: {version}", file=sys.stderr)
        return 1

    print(f"✅ Version consistency check passed: {versions['pyproject.toml']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
