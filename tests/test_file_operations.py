"""
Unit tests for atomic output writes.
"""
import os
import stat

import pytest

from epg_matcher.utils.file_operations import write_text_atomic


@pytest.fixture
def umask_022():
    previous = os.umask(0o022)
    yield
    os.umask(previous)


class TestWriteTextAtomic:
    """Test content, permissions and temp file cleanup."""

    @pytest.mark.asyncio
    async def test_new_file_is_world_readable(self, tmp_path, umask_022):
        target = tmp_path / "out.m3u"

        await write_text_atomic(target, "#EXTM3U\n")

        assert target.read_text(encoding="utf-8") == "#EXTM3U\n"
        assert stat.S_IMODE(target.stat().st_mode) == 0o644

    @pytest.mark.asyncio
    async def test_existing_file_keeps_its_mode(self, tmp_path, umask_022):
        target = tmp_path / "out.m3u"
        target.write_text("old\n", encoding="utf-8")
        os.chmod(target, 0o640)

        await write_text_atomic(target, "new\n")

        assert target.read_text(encoding="utf-8") == "new\n"
        assert stat.S_IMODE(target.stat().st_mode) == 0o640

    @pytest.mark.asyncio
    async def test_no_temporary_files_left_behind(self, tmp_path):
        target = tmp_path / "nested" / "out.m3u"

        await write_text_atomic(target, "x\n")

        assert [path.name for path in target.parent.iterdir()] == ["out.m3u"]
