from __future__ import annotations

import argparse
from pathlib import Path

from autosemi import AnalyzerConfig, BoundaryStyle, Mode, SemicolonAnalyzer


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="dump_ops", description="Print the edits the analyzer reports for a file")
    ap.add_argument("mode", choices=[m.value for m in Mode])
    ap.add_argument("file")
    ap.add_argument("--leading", action="store_true")
    args = ap.parse_args(argv)

    style = BoundaryStyle.LEADING if args.leading else BoundaryStyle.TRAILING
    src = Path(args.file).read_text(encoding="utf-8")
    ops = SemicolonAnalyzer(file=args.file).verify(src, AnalyzerConfig(mode=Mode(args.mode), boundary_style=style))
    print(f"operations: {len(ops)}")
    for i, op in enumerate(ops):
        print(f"{i:>3}: {op}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
