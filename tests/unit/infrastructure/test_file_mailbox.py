"""Tests for the filesystem mailbox."""

from pathlib import Path
from unittest.mock import patch

import pytest

from ecr_bridge.infrastructure.persistence import FileMailbox, atomic_write


@pytest.fixture
def mailbox() -> FileMailbox:
    return FileMailbox()


class TestWrite:
    async def test_creates_directory_and_writes(self, mailbox: FileMailbox, tmp_path: Path) -> None:
        inbox = tmp_path / "nested" / "Bon"

        ok = await mailbox.write(inbox, "bon_20250101120000.txt", "FISCAL\nP;1;0")

        assert ok
        assert (inbox / "bon_20250101120000.txt").read_text(encoding="utf-8") == "FISCAL\nP;1;0"

    async def test_preserves_newlines(self, mailbox: FileMailbox, tmp_path: Path) -> None:
        await mailbox.write(tmp_path, "a.txt", "A\nB")
        assert (tmp_path / "a.txt").read_bytes() == b"A\nB"

    async def test_leaves_no_temp_files(self, mailbox: FileMailbox, tmp_path: Path) -> None:
        await mailbox.write(tmp_path, "bon_1.txt", "Z;1")
        assert [p.name for p in tmp_path.iterdir()] == ["bon_1.txt"]

    async def test_returns_false_when_directory_cannot_be_created(
        self, mailbox: FileMailbox, tmp_path: Path
    ) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")

        assert await mailbox.write(blocker / "Bon", "bon_1.txt", "Z;1") is False

    async def test_returns_false_on_write_error(self, mailbox: FileMailbox, tmp_path: Path) -> None:
        with patch(
            "ecr_bridge.infrastructure.persistence.file_mailbox.atomic_write",
            side_effect=PermissionError("denied"),
        ):
            assert await mailbox.write(tmp_path, "bon_1.txt", "Z;1") is False

    async def test_returns_false_when_content_cannot_be_encoded(
        self, mailbox: FileMailbox, tmp_path: Path
    ) -> None:
        ok = await mailbox.write(tmp_path, "bon_1.txt", "I;\ud800;1;5.00;1")

        assert ok is False
        assert list(tmp_path.iterdir()) == []


class TestFindByName:
    async def test_exact_match(self, mailbox: FileMailbox, tmp_path: Path) -> None:
        (tmp_path / "bon_20250101120000.txt").write_text("")
        found = await mailbox.find_by_name(tmp_path, "bon_20250101120000.txt")
        assert found == tmp_path / "bon_20250101120000.txt"

    async def test_case_insensitive_match(self, mailbox: FileMailbox, tmp_path: Path) -> None:
        (tmp_path / "BON_20250101120000.TXT").write_text("")
        found = await mailbox.find_by_name(tmp_path, "bon_20250101120000.txt")
        assert found is not None
        assert found.name == "BON_20250101120000.TXT"

    async def test_absent(self, mailbox: FileMailbox, tmp_path: Path) -> None:
        (tmp_path / "bon_20250101120001.txt").write_text("")
        assert await mailbox.find_by_name(tmp_path, "bon_20250101120000.txt") is None

    async def test_missing_directory_is_not_an_error(
        self, mailbox: FileMailbox, tmp_path: Path
    ) -> None:
        assert await mailbox.find_by_name(tmp_path / "missing", "bon_1.txt") is None


class TestReadAndList:
    async def test_read(self, mailbox: FileMailbox, tmp_path: Path) -> None:
        path = tmp_path / "bon_1.txt"
        path.write_text("cmd\nExecution Log", encoding="utf-8")
        assert await mailbox.read(path) == "cmd\nExecution Log"

    async def test_read_missing(self, mailbox: FileMailbox, tmp_path: Path) -> None:
        assert await mailbox.read(tmp_path / "gone.txt") is None

    async def test_read_invalid_utf8(self, mailbox: FileMailbox, tmp_path: Path) -> None:
        path = tmp_path / "bon_1.txt"
        path.write_bytes(b"ERROR: \xff bad")
        content = await mailbox.read(path)
        assert content is not None
        assert content.startswith("ERROR:")

    async def test_list_directory_sorted(self, mailbox: FileMailbox, tmp_path: Path) -> None:
        (tmp_path / "b.txt").write_text("")
        (tmp_path / "a.txt").write_text("")
        assert await mailbox.list_directory(tmp_path) == ["a.txt", "b.txt"]

    async def test_list_missing_directory(self, mailbox: FileMailbox, tmp_path: Path) -> None:
        assert await mailbox.list_directory(tmp_path / "missing") == []

    async def test_ensure_directory_idempotent(self, mailbox: FileMailbox, tmp_path: Path) -> None:
        target = tmp_path / "BonOK"
        assert await mailbox.ensure_directory(target)
        assert await mailbox.ensure_directory(target)
        assert target.is_dir()


async def test_atomic_write_replaces_existing(tmp_path: Path) -> None:
    path = tmp_path / "bon_1.txt"
    path.write_text("old")
    await atomic_write(path, "new")
    assert path.read_text() == "new"
