"""
Config bundle splitting.

PrusaSlicer and SuperSlicer can export every user preset into a single INI
"config bundle", one section per preset:

    [filament: PLA Red]
    filament_type = PLA
    [printer: MK3]
    nozzle_diameter = 0.4

Each ``[Type: Name]`` header starts a block that runs until the next header
or the end of the text.  Lines such as ``[vendor]`` or ``[presets]`` have no
colon and are not headers.  Text without any header is not a bundle; the
caller parses it as a single profile.
"""

import logging
import re
from typing import Iterator

from .models import BundleBlock

logger = logging.getLogger(__name__)

_HEADER_RE = re.compile(
    r"^\[(?P<type>[\w \t+\-]+):(?P<name>[^\]\r\n]+)\][ \t]*\r?$",
    re.MULTILINE,
)


def iter_bundle_blocks(text: str) -> Iterator[BundleBlock]:
    """Lazily yield one ``BundleBlock`` per header, in file order."""
    headers = list(_HEADER_RE.finditer(text))
    for idx, header in enumerate(headers):
        start = header.end()
        end = headers[idx + 1].start() if idx + 1 < len(headers) else len(text)
        block = BundleBlock(
            profile_type=header.group("type").strip(),
            profile_name=header.group("name").strip(),
            content=text[start:end].strip(),
        )
        logger.debug("Bundle block: [%s: %s]", block.profile_type, block.profile_name)
        yield block


def split_config_bundle(text: str) -> list[BundleBlock]:
    """Split a config bundle into blocks.  Returns ``[]`` for non-bundles."""
    return list(iter_bundle_blocks(text))


def is_config_bundle(text: str) -> bool:
    """Return True if the text contains at least one ``[Type: Name]`` header."""
    return _HEADER_RE.search(text) is not None
