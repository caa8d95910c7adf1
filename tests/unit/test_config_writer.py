import json
import os
import tempfile
import unittest
from pathlib import Path

from omoconfig.core.configuration.writer import save_config, serialize_config
from omoconfig.core.errors import ConcurrentModificationError

DOCUMENT = {"agents": {"oracle": {"model": "openai/gpt-5.2", "variant": "high"}}}


class SaveConfigTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.root = Path(self.tmp.name)
        self.path = self.root / "oh-my-opencode.json"

    def tearDown(self) -> None:
        self.tmp.cleanup()

    def test_writes_pretty_json(self) -> None:
        save_config(self.path, DOCUMENT)

        self.assertEqual(self.path.read_text(encoding="utf-8"), json.dumps(DOCUMENT, indent=2))
        self.assertEqual(serialize_config(DOCUMENT), json.dumps(DOCUMENT, indent=2))

    def test_newer_file_raises_and_writes_nothing(self) -> None:
        self.path.write_text('{"agents": {}}', encoding="utf-8")
        os.utime(self.path, (2_000, 2_000))

        with self.assertRaises(ConcurrentModificationError) as context:
            save_config(self.path, DOCUMENT, expected_mtime=1_000)

        self.assertIn(str(self.path), str(context.exception))
        self.assertEqual(self.path.read_text(encoding="utf-8"), '{"agents": {}}')

    def test_unchanged_or_older_file_is_written(self) -> None:
        self.path.write_text('{"agents": {}}', encoding="utf-8")
        os.utime(self.path, (2_000, 2_000))

        save_config(self.path, DOCUMENT, expected_mtime=2_000)
        self.assertEqual(json.loads(self.path.read_text(encoding="utf-8")), DOCUMENT)

        os.utime(self.path, (1_500, 1_500))
        save_config(self.path, {"agents": {}}, expected_mtime=2_000)
        self.assertEqual(json.loads(self.path.read_text(encoding="utf-8")), {"agents": {}})

    def test_zero_expected_mtime_is_still_checked(self) -> None:
        self.path.write_text("{}", encoding="utf-8")

        with self.assertRaises(ConcurrentModificationError):
            save_config(self.path, DOCUMENT, expected_mtime=0)

    def test_missing_file_is_not_a_conflict(self) -> None:
        save_config(self.path, DOCUMENT, expected_mtime=1_000)

        self.assertEqual(json.loads(self.path.read_text(encoding="utf-8")), DOCUMENT)

    @unittest.skipIf(os.name == "nt", "requires POSIX symlinks")
    def test_symlinked_config_updates_profile_file(self) -> None:
        profile = self.root / "oh-my-opencode-work.json"
        profile.write_text("{}", encoding="utf-8")
        os.symlink(profile, self.path)

        save_config(self.path, DOCUMENT, expected_mtime=os.stat(self.path).st_mtime)

        self.assertTrue(self.path.is_symlink())
        self.assertEqual(json.loads(profile.read_text(encoding="utf-8")), DOCUMENT)


if __name__ == "__main__":
    unittest.main()
