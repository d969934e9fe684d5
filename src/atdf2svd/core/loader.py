from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import BinaryIO, Union

from atdf2svd.utils.logger import get_logger

log = get_logger(__name__)


def load_atdf(source: Union[str, Path, BinaryIO]) -> ET.Element:
    """Read an ATDF document and return its root element."""
    root = ET.parse(source).getroot()
    log.debug("Read %s root=<%s>", getattr(source, "name", source), root.tag)
    return root
