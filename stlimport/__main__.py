"""stlimport - Decode binary STL files into interleaved vertex buffers."""

import sys
from typing import Optional

from stlimport.cli.app import app


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the stlimport CLI."""
    try:
        app(argv)
        return 0
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 0


if __name__ == "__main__":
    sys.exit(main())
