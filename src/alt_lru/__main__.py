#!/usr/bin/env python3
"""alt-lru main entry point

Usage:
    python -m alt_lru bench --capacity 30 --iterations 10000
    python -m alt_lru bench --threads 4 --json
    python -m alt_lru validate --operations 5000 --seed 7
"""

from __future__ import annotations

import sys

from alt_lru.cli import cmd_bench, cmd_validate, create_parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command == "bench":
        return cmd_bench(args)
    elif args.command == "validate":
        return cmd_validate(args)
    else:
        parser.print_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
