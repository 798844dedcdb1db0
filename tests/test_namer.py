"""Tests for destination naming."""

import os
from datetime import datetime

import pytest

from exifrename.errors import DestinationConflict
from exifrename.grouper import SourceGroup
from exifrename.namer import DestinationNamer, timestamp_basename
from exifrename.photo import FileEntry

from conftest import write_file

TIMESTAMP = datetime(2023, 5, 1, 10, 20, 30, 500000)


@pytest.fixture
def group(source_dir):
    write_file(os.path.join(source_dir, 'IMG_0001.JPG'))
    write_file(os.path.join(source_dir, 'IMG_0001.CR2'))
    g = SourceGroup(FileEntry(os.path.join(source_dir, 'IMG_0001.JPG')),
                    ['IMG_0001.JPG', 'IMG_0001.CR2'])
    g.assign_timestamp(TIMESTAMP)
    return g


class TestTimestampBasename:
    """Tests for timestamp_basename."""

    def test_format(self):
        assert timestamp_basename(TIMESTAMP) == '20230501_102030_500'

    def test_zero_padded_millis(self):
        assert timestamp_basename(datetime(2001, 2, 3, 4, 5, 6, 7000)) == '20010203_040506_007'

    def test_matches_strftime(self):
        ts = datetime(1999, 12, 31, 23, 59, 59, 999999)
        assert timestamp_basename(ts) == ts.strftime('%Y%m%d_%H%M%S') + '_999'


class TestDestinationNamer:
    """Tests for DestinationNamer."""

    def test_all_members_get_timestamp(self, group, target_dir):
        namer = DestinationNamer(target_dir)

        assert namer.destination_for(group, 'IMG_0001.JPG') == \
            os.path.join(target_dir, '20230501_102030_500.jpg')
        assert namer.destination_for(group, 'IMG_0001.CR2') == \
            os.path.join(target_dir, '20230501_102030_500.cr2')

    def test_keep_related_names(self, group, target_dir):
        namer = DestinationNamer(target_dir)

        assert namer.destination_for(group, 'IMG_0001.JPG', keep_related_names=True) == \
            os.path.join(target_dir, '20230501_102030_500.jpg')
        assert namer.destination_for(group, 'IMG_0001.CR2', keep_related_names=True) == \
            os.path.join(target_dir, 'IMG_0001.cr2')

    def test_mirrors_subdirectory(self, source_dir, target_dir):
        path = write_file(os.path.join(source_dir, 'trip', 'day1', 'a.jpg'))
        entry = FileEntry(path, scan_root=source_dir)

        assert DestinationNamer(target_dir).destination_dir(entry) == \
            os.path.join(target_dir, 'trip', 'day1')

    def test_conflict_refused(self, target_dir):
        write_file(os.path.join(target_dir, 'x.jpg'))
        namer = DestinationNamer(target_dir)

        with pytest.raises(DestinationConflict) as exc_info:
            namer.resolve('src/x.JPG', target_dir, 'x', '.JPG')
        assert exc_info.value.destination == os.path.join(target_dir, 'x.jpg')

    def test_dangling_symlink_counts_as_existing(self, target_dir):
        os.makedirs(target_dir)
        os.symlink('/nonexistent/file', os.path.join(target_dir, 'x.jpg'))

        with pytest.raises(DestinationConflict):
            DestinationNamer(target_dir).resolve('x.jpg', target_dir, 'x', '.jpg')

    def test_overwrite_uses_existing(self, target_dir):
        write_file(os.path.join(target_dir, 'x.jpg'))
        namer = DestinationNamer(target_dir, overwrite=True, use_suffixes=True)

        assert namer.resolve('x.jpg', target_dir, 'x', '.jpg') == os.path.join(target_dir, 'x.jpg')

    def test_suffix_enumeration(self, target_dir):
        write_file(os.path.join(target_dir, 'x.jpg'))
        write_file(os.path.join(target_dir, 'x_1.jpg'))
        namer = DestinationNamer(target_dir, use_suffixes=True)

        assert namer.resolve('x.jpg', target_dir, 'x', '.JPG') == os.path.join(target_dir, 'x_2.jpg')

    def test_suffix_takes_first_gap(self, target_dir):
        write_file(os.path.join(target_dir, 'x.jpg'))
        write_file(os.path.join(target_dir, 'x_2.jpg'))
        namer = DestinationNamer(target_dir, use_suffixes=True)

        assert namer.resolve('x.jpg', target_dir, 'x', '.jpg') == os.path.join(target_dir, 'x_1.jpg')

    def test_no_suffix_when_free(self, target_dir):
        namer = DestinationNamer(target_dir, use_suffixes=True)
        assert namer.resolve('x.jpg', target_dir, 'x', '.jpg') == os.path.join(target_dir, 'x.jpg')
