from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .analyzer import AnalyzerConfig, BoundaryStyle, Mode, SemicolonAnalyzer
from .api import SemicolonFixer
from .errors import AnalysisError
from .ops import Diagnostic


_MODES = {"add": Mode.ALWAYS, "remove": Mode.NEVER}


def _print_diagnostic(diag: Diagnostic) -> None:
    print(diag.format(), file=sys.stderr)


def _fix(src: str, *, file: str, config: AnalyzerConfig) -> str:
    fixer = SemicolonFixer(analyzer=SemicolonAnalyzer(file=file))
    return fixer.process(src, config, on_diagnostic=_print_diagnostic)


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="autosemi", description="Add or remove semicolons in JavaScript sources")
    ap.add_argument("command", choices=sorted(_MODES), help="add: terminate every statement; remove: drop redundant semicolons")
    ap.add_argument("files", nargs="*", help="Files to process (default: stdin)")
    ap.add_argument(
        "--leading",
        action="store_true",
        help="Put semicolons guarding lines that start with + - [ ( / ` at the start of those lines",
    )
    ap.add_argument("-w", "--write", action="store_true", help="Rewrite files in place")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log every applied edit")
    args = ap.parse_intermixed_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format="%(name)s: %(message)s")
    style = BoundaryStyle.LEADING if args.leading else BoundaryStyle.TRAILING
    config = AnalyzerConfig(mode=_MODES[args.command], boundary_style=style)

    try:
        if not args.files:
            sys.stdout.write(_fix(sys.stdin.read(), file="<stdin>", config=config))
            return 0
        for name in args.files:
            p = Path(name)
            # Keep "\r\n" as is; lines are split on "\n" only.
            with p.open(encoding="utf-8", newline="") as f:
                src = f.read()
            out = _fix(src, file=str(p), config=config)
            if args.write:
                if out != src:
                    p.write_text(out, encoding="utf-8", newline="")
            else:
                sys.stdout.write(out)
    except AnalysisError as e:
        print(str(e), file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
