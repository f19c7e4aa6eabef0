#!/usr/bin/env python3
"""
Time ToC generation over Markdown files (default: every .md under docs_samples/).

Run from repo root:
    python scripts/bench_toc.py [FILE ...]
"""
import sys
import time
from pathlib import Path

from llms_fetch import TocConfig, generate_toc

REPO_ROOT = Path(__file__).resolve().parent.parent
SAMPLES = REPO_ROOT / "docs_samples"
ROUNDS = 20


def main() -> None:
    paths = [Path(p) for p in sys.argv[1:]] or sorted(SAMPLES.glob("*.md"))
    if not paths:
        print(f"No Markdown files given and none in {SAMPLES}")
        return
    config = TocConfig()
    for path in paths:
        markdown = path.read_text(encoding="utf-8")
        size = len(markdown.encode("utf-8"))
        start = time.perf_counter()
        for _ in range(ROUNDS):
            toc = generate_toc(markdown, size, config)
        elapsed = (time.perf_counter() - start) / ROUNDS
        mb_per_s = size / elapsed / 1e6 if elapsed else 0.0
        rows = len(toc.splitlines()) if toc else 0
        print(f"{path.name}: {size} bytes, {elapsed * 1000:.2f} ms/run ({mb_per_s:.1f} MB/s), toc rows: {rows}")


if __name__ == "__main__":
    main()
