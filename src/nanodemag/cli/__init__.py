"""CLI modules.

Note: avoid importing submodules at import-time. This keeps
`python -m nanodemag.cli.<cmd>` free of `runpy` warnings.
"""

from __future__ import annotations


def calc_main(argv: list[str] | None = None) -> int:
    """Lazy wrapper for `nanodemag.cli.calc.main`."""

    from .calc import main

    return main(argv)


__all__ = ["calc_main"]
