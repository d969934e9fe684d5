from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

from atdf2svd.atdf.model import AtdfDocument, Device
from atdf2svd.atdf.parser import parse_document
from atdf2svd.core.loader import load_atdf
from atdf2svd.svd.translate import translate
from atdf2svd.svd.writer import write_svd
from atdf2svd.utils.logger import get_logger, setup_logging

log = get_logger(__name__)


class DeviceNotFound(LookupError):
    pass


def select_device(doc: AtdfDocument, name: Optional[str]) -> Device:
    if name is None:
        if not doc.devices:
            raise DeviceNotFound("document declares no devices")
        return doc.devices[0]

    device = doc.device(name)
    if device is None:
        known = ", ".join(d.name for d in doc.devices) or "none"
        raise DeviceNotFound(f"no device named {name!r} (available: {known})")
    return device


def run_app(
    atdf_path: Path,
    output: Optional[Path],
    device_name: Optional[str],
    log_level: str,
    quiet: bool,
) -> None:
    setup_logging(level=log_level, quiet=quiet)

    log.info("ATDF: %s", atdf_path)

    doc = parse_document(load_atdf(atdf_path))
    device = select_device(doc, device_name)
    svd = translate(device, doc.modules)

    if output is None:
        write_svd(svd, sys.stdout)
    else:
        write_svd(svd, output)
