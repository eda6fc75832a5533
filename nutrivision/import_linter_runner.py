"""Console entry point checking the layer contracts declared in ``pyproject.toml``."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Sequence

import click
from importlinter.cli import lint_imports_command

PYPROJECT = Path(__file__).resolve().parent.parent / "pyproject.toml"


def build_args(argv: Sequence[str] | None) -> List[str]:
    """Default to the project's contracts unless a config is given explicitly."""
    args = list(argv or [])
    if "--config" not in args and PYPROJECT.exists():
        args = ["--config", str(PYPROJECT), *args]
    return args


def main(argv: Sequence[str] | None = None) -> int:
    """Run Import Linter and return its exit code instead of exiting."""
    try:
        lint_imports_command.main(
            args=build_args(argv),
            prog_name="nutrivision-lint-imports",
            standalone_mode=False,
        )
    except click.exceptions.Exit as exc:  # pragma: no cover - click handles sys.exit
        return exc.exit_code
    except click.ClickException as exc:  # pragma: no cover - surfaced to stderr
        exc.show()
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main(sys.argv[1:]))
