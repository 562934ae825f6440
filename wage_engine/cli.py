"""Command that starts the payroll HTTP server."""

from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Sequence

from wage_engine.api import serve

DEFAULT_TAX_LAW_DIR = "tax_laws"
DEFAULT_BIND_ADDR = "127.0.0.1:3000"


def main(argv: Sequence[str] | None = None) -> None:
    """Start the server using ``WAGE_TAX_LAW_DIR`` and ``WAGE_BIND_ADDR``."""
    parser = argparse.ArgumentParser(
        prog="wage-engine",
        description=(
            "Serve the payroll API. Tax laws are read from WAGE_TAX_LAW_DIR "
            f"(default {DEFAULT_TAX_LAW_DIR!r}); the server binds to "
            f"WAGE_BIND_ADDR (default {DEFAULT_BIND_ADDR!r})."
        ),
    )
    parser.parse_args(argv)
    tax_dir = os.environ.get("WAGE_TAX_LAW_DIR", DEFAULT_TAX_LAW_DIR)
    addr = os.environ.get("WAGE_BIND_ADDR", DEFAULT_BIND_ADDR)
    try:
        serve(addr, tax_dir)
    except KeyboardInterrupt:
        pass
    except (OSError, ValueError) as err:
        print(f"Error running server: {err}", file=sys.stderr)


if __name__ == "__main__":
    main()