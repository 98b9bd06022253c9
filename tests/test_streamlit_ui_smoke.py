from __future__ import annotations

import subprocess
import sys
from pathlib import Path


def test_streamlit_app_compiles() -> None:
    repo_root = Path(__file__).resolve().parents[1]

    for pkg in ("app", "cable_core", "tools"):
        result = subprocess.run(
            [sys.executable, "-m", "compileall", "-q", str(repo_root / pkg)],
            capture_output=True,
            text=True,
            check=False,
        )
        assert result.returncode == 0, (
            f"compileall failed for {pkg}/.\n"
            f"stdout:\n{result.stdout}\n"
            f"stderr:\n{result.stderr}"
        )
