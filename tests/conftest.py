"""Shared fixtures for exifrename tests."""

import os
import shutil
import tempfile

import pytest
from PIL import Image

EXIF_IFD = 34665
DATE_TIME_ORIGINAL = 36867
SUBSEC_TIME_ORIGINAL = 37521


def write_jpeg(path, date_time=None, subsec=None):
    """Write a small JPEG, optionally carrying DateTimeOriginal/SubsecTimeOriginal."""
    img = Image.new('RGB', (8, 8), color=(200, 100, 50))
    if date_time is None:
        img.save(path, 'JPEG')
        return path

    exif = Image.Exif()
    exif_ifd = {DATE_TIME_ORIGINAL: date_time}
    if subsec is not None:
        exif_ifd[SUBSEC_TIME_ORIGINAL] = subsec
    exif[EXIF_IFD] = exif_ifd
    img.save(path, 'JPEG', exif=exif)
    return path


def write_file(path, content=b'data'):
    os.makedirs(os.path.dirname(path) or '.', exist_ok=True)
    with open(path, 'wb') as f:
        f.write(content)
    return path


@pytest.fixture
def temp_dir():
    """Create an empty temporary directory."""
    path = tempfile.mkdtemp()
    yield path
    shutil.rmtree(path)


@pytest.fixture
def source_dir(temp_dir):
    path = os.path.join(temp_dir, 'source')
    os.makedirs(path)
    return path


@pytest.fixture
def target_dir(temp_dir):
    return os.path.join(temp_dir, 'target')
