# src/blockfall/cli/play.py
from __future__ import annotations

from blockfall.apps.play.entrypoint import main as _main


def main() -> int:
    return _main()


if __name__ == "__main__":
    raise SystemExit(main())
