from __future__ import annotations

import os
import subprocess
import sys
import tempfile
from pathlib import Path


def _run(cmd: list[str], env: dict[str, str]) -> None:
    result = subprocess.run(
        cmd,
        check=False,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        text=True,
        env=env,
    )
    if result.returncode != 0:
        print(result.stdout)
        raise SystemExit(result.returncode)


def main() -> None:
    root = Path(__file__).resolve().parents[1]
    env = os.environ.copy()
    env["PYTHONPATH"] = str(root / "src")
    example = str(root / "examples" / "example_sheet.yaml")

    _run([sys.executable, "-m", "sheet_ui_cli.cli", "--help"], env)
    _run([sys.executable, "-m", "sheet_ui_cli.cli", "validate", "--input", example], env)
    _run([sys.executable, "-m", "sheet_ui_cli.cli", "show", example], env)
    with tempfile.TemporaryDirectory() as tmp:
        _run(
            [
                sys.executable,
                "-m",
                "sheet_ui_cli.cli",
                "export",
                "--input",
                example,
                "--output",
                str(Path(tmp) / "orders.xlsx"),
                "--csv",
            ],
            env,
        )
    print("Smoke test passed")


if __name__ == "__main__":
    main()
