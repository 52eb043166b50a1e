from __future__ import annotations

import argparse
import hashlib

from autosemi import insert_semicolons, remove_semicolons


def _sources(seed: int | None, count: int) -> list[str]:
    from autosemi.testing import SNAPSHOT_SOURCES, generate_js_sources

    if seed is None:
        return list(SNAPSHOT_SOURCES)
    return generate_js_sources(seed=seed, count=count)


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="compute_snapshot_hash")
    ap.add_argument("--seed", type=int, default=None, help="hash a generated corpus instead of the fixed sources")
    ap.add_argument("--count", type=int, default=500)
    args = ap.parse_args(argv)

    h = hashlib.sha256()
    for i, src in enumerate(_sources(args.seed, args.count)):
        for fix in (insert_semicolons, remove_semicolons):
            out = fix(src)
            if fix(out) != out:
                raise SystemExit(f"non-idempotent {fix.__name__} at case {i}")
            h.update(out.encode("utf-8"))
            h.update(b"\n---\n")

    print(h.hexdigest())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
