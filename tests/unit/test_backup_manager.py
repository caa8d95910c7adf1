import os
import tempfile
import unittest
from datetime import UTC, datetime
from pathlib import Path

from omoconfig.core.backup import cleanup_old_backups, create_backup, list_backups, restore_backup
from omoconfig.core.errors import BackupError, BackupNotFoundError


class BackupManagerTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.root = Path(self.tmp.name)
        self.config_path = self.root / "oh-my-opencode.json"
        self.config_path.write_text('{"agents": {}}', encoding="utf-8")

    def tearDown(self) -> None:
        self.tmp.cleanup()

    def _backup_at(self, day: int, content: str | None = None) -> Path:
        if content is not None:
            self.config_path.write_text(content, encoding="utf-8")
        return create_backup(self.config_path, now=datetime(2026, 1, day, 12, 30, 45, tzinfo=UTC))

    def test_create_backup_copies_current_content(self) -> None:
        backup_path = self._backup_at(2)

        self.assertEqual(backup_path.name, "oh-my-opencode.json.backup.20260102-123045")
        self.assertEqual(backup_path.read_text(encoding="utf-8"), '{"agents": {}}')

    def test_create_backup_requires_existing_config(self) -> None:
        self.config_path.unlink()

        with self.assertRaises(BackupError):
            create_backup(self.config_path)

    def test_list_backups_newest_first(self) -> None:
        for day in (3, 1, 2):
            self._backup_at(day)
        (self.root / "oh-my-opencode.json.backup.not-a-timestamp").write_text("{}", encoding="utf-8")
        (self.root / "other.json.backup.20260105-000000").write_text("{}", encoding="utf-8")

        timestamps = [backup.timestamp for backup in list_backups(self.config_path)]

        self.assertEqual(timestamps, ["20260103-123045", "20260102-123045", "20260101-123045"])

    def test_list_backups_in_missing_directory(self) -> None:
        self.assertEqual(list_backups(self.root / "absent" / "oh-my-opencode.json"), [])

    def test_restore_backup_overwrites_config(self) -> None:
        self._backup_at(1, '{"agents": {"oracle": {"model": "old/model"}}}')
        self.config_path.write_text('{"agents": {}}', encoding="utf-8")

        restore_backup(self.config_path, "20260101-123045")

        self.assertEqual(
            self.config_path.read_text(encoding="utf-8"),
            '{"agents": {"oracle": {"model": "old/model"}}}',
        )

    @unittest.skipIf(os.name == "nt", "requires POSIX symlinks")
    def test_restore_writes_through_profile_symlink(self) -> None:
        profile = self.root / "oh-my-opencode-work.json"
        profile.write_text('{"agents": {}}', encoding="utf-8")
        self.config_path.unlink()
        os.symlink(profile, self.config_path)
        self._backup_at(1)
        profile.write_text('{"categories": {}}', encoding="utf-8")

        restore_backup(self.config_path, "20260101-123045")

        self.assertTrue(self.config_path.is_symlink())
        self.assertEqual(profile.read_text(encoding="utf-8"), '{"agents": {}}')

    def test_restore_unknown_or_malformed_timestamp(self) -> None:
        for timestamp in ("20990101-000000", "../../etc/passwd"):
            with self.subTest(timestamp=timestamp):
                with self.assertRaises(BackupNotFoundError):
                    restore_backup(self.config_path, timestamp)
        self.assertEqual(self.config_path.read_text(encoding="utf-8"), '{"agents": {}}')

    def test_cleanup_keeps_newest_backups(self) -> None:
        for day in range(1, 13):
            self._backup_at(day)

        removed = cleanup_old_backups(self.config_path)

        self.assertEqual(sorted(path.name[-15:] for path in removed), ["20260101-123045", "20260102-123045"])
        remaining = [backup.timestamp for backup in list_backups(self.config_path)]
        self.assertEqual(len(remaining), 10)
        self.assertEqual(remaining[0], "20260112-123045")
        self.assertEqual(remaining[-1], "20260103-123045")

    def test_cleanup_with_few_backups_is_noop(self) -> None:
        self._backup_at(1)

        self.assertEqual(cleanup_old_backups(self.config_path, max_count=1), [])
        self.assertEqual(len(list_backups(self.config_path)), 1)


if __name__ == "__main__":
    unittest.main()
