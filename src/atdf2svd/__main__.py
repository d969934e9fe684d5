from __future__ import annotations

import argparse
import sys
import xml.etree.ElementTree as ET
from pathlib import Path

from atdf2svd.app import DeviceNotFound, run_app
from atdf2svd.atdf.errors import SchemaError
from atdf2svd.utils.logger import get_logger

log = get_logger("atdf2svd")


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="atdf2svd", description="Convert an Atmel ATDF device file to CMSIS-SVD")
    p.add_argument("atdf", type=Path, help="ATDF XML file path")
    p.add_argument("-o", "--output", type=Path, default=None, help="SVD output path (default: stdout)")
    p.add_argument("--device", default=None, help="Device to convert (default: first device in the file)")

    # Logging
    p.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    p.add_argument("--quiet", action="store_true", help="Only report errors")

    args = p.parse_args(argv)

    try:
        run_app(
            atdf_path=args.atdf,
            output=args.output,
            device_name=args.device,
            log_level=args.log_level,
            quiet=args.quiet,
        )
    except (SchemaError, ValueError, DeviceNotFound, ET.ParseError, OSError) as e:
        log.error("%s: %s", args.atdf, e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
