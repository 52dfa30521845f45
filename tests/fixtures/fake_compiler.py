"""Stand-in for the external document compiler used by the test suite.

Usage: fake_compiler.py INPUT OUTPUT

Copies INPUT to OUTPUT under a ``<!-- generated -->`` header. A line of the
form ``EXIT <code>`` in the input makes it exit with that code without
writing anything. ``DOCBUILD_FAKE_LOG`` names a file that receives
``start``/``end`` lines around the work; ``DOCBUILD_FAKE_SLEEP`` adds a delay
in seconds between them.
"""

from __future__ import annotations

import os
import sys
import time
from pathlib import Path


def _log(event: str, source: str) -> None:
    log_path = os.environ.get("DOCBUILD_FAKE_LOG")
    if not log_path:
        return
    with open(log_path, "a", encoding="utf-8") as handle:
        handle.write(f"{event} {source}\n")


def main(argv: list[str]) -> int:
    source, output = argv[1], argv[2]
    _log("start", source)
    time.sleep(float(os.environ.get("DOCBUILD_FAKE_SLEEP", "0")))

    text = Path(source).read_text(encoding="utf-8")
    for line in text.splitlines():
        if line.startswith("EXIT "):
            _log("end", source)
            return int(line.split()[1])

    Path(output).write_text(f"<!-- generated -->\n{text}", encoding="utf-8")
    _log("end", source)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
