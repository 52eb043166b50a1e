from __future__ import annotations

import hashlib
import os

from autosemi import insert_semicolons, remove_semicolons
from autosemi.testing import SNAPSHOT_SOURCES, generate_js_sources


# Update this by running: `python scripts/compute_snapshot_hash.py`
EXPECTED_SHA256 = "23f21757f409fe11d896d4d06094e71cee7d4722c9b96c6064a836586abf3d8d"


def test_snapshot_hash() -> None:
    h = hashlib.sha256()
    for src in SNAPSHOT_SOURCES:
        for fix in (insert_semicolons, remove_semicolons):
            h.update(fix(src).encode("utf-8"))
            h.update(b"\n---\n")

    digest = h.hexdigest()
    assert digest == EXPECTED_SHA256, f"snapshot outputs changed\nexpected {EXPECTED_SHA256}\nactual   {digest}"


def test_snapshot_corpus_is_stable() -> None:
    seed = int(os.environ.get("AUTOSEMI_SNAPSHOT_SEED", "1"))
    count = int(os.environ.get("AUTOSEMI_SNAPSHOT_CASES", "500"))

    for i, src in enumerate(generate_js_sources(seed=seed, count=count)):
        added = insert_semicolons(src)
        removed = remove_semicolons(src)
        assert insert_semicolons(added) == added, f"case {i}: insertion not idempotent"
        assert remove_semicolons(removed) == removed, f"case {i}: removal not idempotent"
        assert added.count("\n") == src.count("\n")
        assert removed.count("\n") == src.count("\n")
        # Both directions describe the same program.
        assert remove_semicolons(added) == removed, f"case {i}: modes disagree"


def test_generation_is_deterministic() -> None:
    assert generate_js_sources(seed=7, count=20) == generate_js_sources(seed=7, count=20)
