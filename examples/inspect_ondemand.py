#!/usr/bin/env python3
"""
Show the regions of a saved homepage / ondemand bundle that the scanner keys on.

Use this when token generation starts failing to see whether the page still
matches the patterns. Run with saved copies of both documents:

    python examples/inspect_ondemand.py home.html ondemand.s.abc123a.js

Output is kept compact: 80 chars before each match, 120 after, 4 matches max per pattern.
"""

import re
import sys
from pathlib import Path

from x_client_transaction import scanner

BEFORE = 80
AFTER = 120
MAX_PER_PATTERN = 4

HTML_SEARCHES = [
    ("ondemand hash",        scanner.ONDEMAND_REGEX),
    ("verification meta",    re.compile(scanner.VERIFICATION_META)),
    ("animation frame ids",  re.compile(rf'id="{scanner.FRAME_ID_PREFIX}[^"]*"')),
]

JS_SEARCHES = [
    ("key byte indices",     scanner.INDICES_REGEX),
]


def show(label: str, content: str, searches):
    print(f"# {label} ({len(content):,} bytes)\n")
    for name, pattern in searches:
        matches = list(pattern.finditer(content))
        print(f"## {name} ({len(matches)} hit{'s' if len(matches) != 1 else ''})\n")
        for m in matches[:MAX_PER_PATTERN]:
            start = max(0, m.start() - BEFORE)
            end = min(len(content), m.end() + AFTER)
            print(f"--- offset {m.start()} ---")
            print(content[start:end].replace("\r", "").replace("\n", " "))
            print()


def main():
    if len(sys.argv) != 3:
        print(__doc__)
        sys.exit(1)

    html = Path(sys.argv[1]).read_text(encoding="utf-8", errors="ignore")
    js = Path(sys.argv[2]).read_text(encoding="utf-8", errors="ignore")

    show(sys.argv[1], html, HTML_SEARCHES)
    show(sys.argv[2], js, JS_SEARCHES)


if __name__ == "__main__":
    main()
