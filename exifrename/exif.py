"""
Reading the original-capture timestamp of a file.
"""

import logging
import re
from datetime import datetime
from typing import Callable, Optional, Tuple

from PIL import Image

from .errors import MetadataUnavailable, NotApplicable
from .photo import FileEntry

logger = logging.getLogger(__name__)

# EXIF tag IDs
EXIF_IFD = 34665
DATE_TIME_ORIGINAL = 36867
SUBSEC_TIME_ORIGINAL = 37521

DEFAULT_SUBSEC = '000'

# EXIF date format plus fraction: "YYYY:MM:DD HH:MM:SS.fff"
_TIMESTAMP_RE = re.compile(r'^\d{4}:\d{2}:\d{2} \d{2}:\d{2}:\d{2}\.(\d{1,3})$')

TimestampReader = Callable[[str], Tuple[str, Optional[str]]]


def _tag_text(value) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bytes):
        value = value.decode('ascii', errors='replace')
    if not isinstance(value, str):
        return None
    return value.strip('\x00').strip() or None


def read_original_timestamp(path: str) -> Tuple[str, Optional[str]]:
    """
    Read DateTimeOriginal and SubsecTimeOriginal from a file's EXIF block.

    Args:
        path: Path to the image file.

    Returns:
        Tuple of (date/time text, sub-second text or None).

    Raises:
        MetadataUnavailable: If the tag is missing or the image or its
            metadata cannot be decoded.
    """
    try:
        with Image.open(path) as img:
            exif = img.getexif()
            exif_ifd = exif.get_ifd(EXIF_IFD)
            date_time = _tag_text(exif_ifd.get(DATE_TIME_ORIGINAL))
            subsec = _tag_text(exif_ifd.get(SUBSEC_TIME_ORIGINAL))
            if date_time is None:
                date_time = _tag_text(exif.get(DATE_TIME_ORIGINAL))
                subsec = subsec or _tag_text(exif.get(SUBSEC_TIME_ORIGINAL))
    except Exception as e:
        # Pillow raises a wide range of errors on corrupt EXIF blocks
        raise MetadataUnavailable(path, f"Could not read EXIF data: {e}") from e

    if date_time is None:
        raise MetadataUnavailable(path, "Could not find DateTimeOriginal EXIF tag")

    return date_time, subsec


def parse_original_timestamp(path: str, date_time: str,
                             subsec: Optional[str] = None) -> datetime:
    """
    Parse EXIF date/time and sub-second text into a datetime.

    A missing sub-second value counts as zero milliseconds. The fraction
    has one to three digits and is read as a decimal fraction, so '5'
    is 500 milliseconds.

    Raises:
        MetadataUnavailable: If the text does not match the EXIF format.
    """
    text = f"{date_time}.{subsec or DEFAULT_SUBSEC}"
    match = _TIMESTAMP_RE.match(text)
    if match is None:
        raise MetadataUnavailable(path, f"Cannot parse timestamp {text!r}")

    try:
        parsed = datetime.strptime(text[:19], '%Y:%m:%d %H:%M:%S')
    except ValueError as e:
        raise MetadataUnavailable(path, f"Cannot parse timestamp {text!r}: {e}") from e

    millis = int(match.group(1).ljust(3, '0'))
    return parsed.replace(microsecond=millis * 1000)


def resolve_timestamp(entry: FileEntry, use_modtime: bool = False,
                      reader: TimestampReader = read_original_timestamp) -> datetime:
    """
    Determine the canonical timestamp for a file.

    Args:
        entry: The file to resolve.
        use_modtime: Fall back to the file modification time when no
            capture timestamp is available.
        reader: Function returning the raw EXIF date/time fields.

    Returns:
        datetime with millisecond precision.

    Raises:
        MetadataUnavailable: If no timestamp is found and the fallback is off.
    """
    try:
        if not entry.is_image:
            raise NotApplicable(entry.path)
        date_time, subsec = reader(entry.path)
        return parse_original_timestamp(entry.path, date_time, subsec)
    except MetadataUnavailable as e:
        if not use_modtime:
            raise
        logger.debug('"%s": %s; using modification time', entry.path, e.reason)
        return entry.modified_time
