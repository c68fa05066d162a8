"""
CAS worker process.

Reads a JSON list of ``[key, expression]`` pairs on stdin, evaluates them with
SympyCasSession.instantiate() and prints the result as one JSON line.

Usage:
    echo '[["val0", "x^2"]]' | python -m stackinput.cas.worker
"""

import json
import sys

from .session import SympyCasSession


def main() -> int:
    batch = json.loads(sys.stdin.read() or "[]")
    print(json.dumps(SympyCasSession.instantiate(batch)))
    return 0


if __name__ == "__main__":
    sys.exit(main())
