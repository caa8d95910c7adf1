import json
import logging
import os
import tempfile
import unittest
from pathlib import Path

from omoconfig.core.configuration import load_config, load_config_from_file, resolve_config_path, validate_config
from omoconfig.core.configuration.defaults import DEFAULT_CONFIG
from omoconfig.core.configuration.environment import EnvironmentManager
from omoconfig.core.configuration.resolve import discover_config_path
from omoconfig.core.errors import InvalidConfigError


class ValidateConfigTests(unittest.TestCase):
    def test_unknown_fields_are_preserved(self) -> None:
        raw = {
            "$schema": "https://example.invalid/schema.json",
            "agents": {"oracle": {"model": "openai/gpt-5.2", "temperature": 0.2}},
            "disabled_hooks": ["comment-checker"],
        }

        self.assertEqual(validate_config(raw), raw)

    def test_missing_model_is_reported_with_location(self) -> None:
        with self.assertRaises(InvalidConfigError) as context:
            validate_config({"agents": {"oracle": {"variant": "high"}}})

        self.assertIn("agents.oracle.model: Field required", context.exception.issues)
        self.assertTrue(str(context.exception).startswith("Invalid configuration:"))

    def test_non_object_document_is_rejected(self) -> None:
        with self.assertRaises(InvalidConfigError) as context:
            validate_config(["not", "a", "mapping"])

        self.assertTrue(context.exception.issues[0].startswith("<root>:"))


class LoadConfigTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.root = Path(self.tmp.name)
        self.path = self.root / "oh-my-opencode.json"

    def tearDown(self) -> None:
        self.tmp.cleanup()

    def test_missing_file_yields_defaults_copy(self) -> None:
        self.assertIsNone(load_config_from_file(self.path))

        loaded = load_config(self.path)
        self.assertEqual(loaded, DEFAULT_CONFIG)

        loaded["agents"].clear()
        self.assertTrue(DEFAULT_CONFIG["agents"])

    def test_reads_valid_document(self) -> None:
        document = {"categories": {"quick": {"model": "anthropic/claude-haiku-4-5"}}}
        self.path.write_text(json.dumps(document), encoding="utf-8")

        self.assertEqual(load_config(self.path), document)

    def test_malformed_json_raises_invalid_config(self) -> None:
        self.path.write_text("{not json", encoding="utf-8")

        with self.assertRaises(InvalidConfigError) as context:
            load_config(self.path)

        self.assertIn("Malformed JSON", str(context.exception))
        self.assertIn(str(self.path), str(context.exception))

    def test_schema_problem_names_the_file(self) -> None:
        self.path.write_text(json.dumps({"agents": {"oracle": {}}}), encoding="utf-8")

        with self.assertRaises(InvalidConfigError) as context:
            load_config(self.path)

        self.assertIn(str(self.path), str(context.exception))
        self.assertEqual(context.exception.issues, ("agents.oracle.model: Field required",))

    @unittest.skipIf(os.name == "nt", "requires POSIX symlinks")
    def test_dangling_symlink_counts_as_missing(self) -> None:
        os.symlink(self.root / "oh-my-opencode-gone.json", self.path)

        self.assertIsNone(load_config_from_file(self.path))


class ResolveConfigPathTests(unittest.TestCase):
    def setUp(self) -> None:
        self.cwd = Path("/work/repo/pkg")
        self.user_file = Path("/home/user/.config/opencode/oh-my-opencode.json")

    def test_project_config_wins(self) -> None:
        existing = {
            Path("/work/repo/pkg/.opencode/oh-my-opencode.json"),
            Path("/work/repo/.opencode/oh-my-opencode.json"),
            self.user_file,
        }

        found = discover_config_path(
            cwd=self.cwd,
            user_config_file=self.user_file,
            exists=existing.__contains__,
            git_root=lambda _: Path("/work/repo"),
        )

        self.assertEqual(found, Path("/work/repo/pkg/.opencode/oh-my-opencode.json"))

    def test_git_root_config_before_user_config(self) -> None:
        existing = {Path("/work/repo/.opencode/oh-my-opencode.json"), self.user_file}

        found = discover_config_path(
            cwd=self.cwd,
            user_config_file=self.user_file,
            exists=existing.__contains__,
            git_root=lambda _: Path("/work/repo"),
        )

        self.assertEqual(found, Path("/work/repo/.opencode/oh-my-opencode.json"))

    def test_user_config_outside_git(self) -> None:
        found = discover_config_path(
            cwd=self.cwd,
            user_config_file=self.user_file,
            exists={self.user_file}.__contains__,
            git_root=lambda _: None,
        )

        self.assertEqual(found, self.user_file)

    def test_nothing_found(self) -> None:
        found = discover_config_path(
            cwd=self.cwd,
            user_config_file=self.user_file,
            exists=lambda _: False,
            git_root=lambda _: None,
        )

        self.assertIsNone(found)

    def test_explicit_option_takes_precedence(self) -> None:
        resolved = resolve_config_path("~/custom.json", discover=lambda: self.user_file)

        self.assertEqual(resolved, Path("~/custom.json").expanduser())

    def test_falls_back_to_user_config_file(self) -> None:
        resolved = resolve_config_path(None, discover=lambda: None, user_config_file=self.user_file)

        self.assertEqual(resolved, self.user_file)


class EnvironmentManagerTests(unittest.TestCase):
    def test_config_dir_override(self) -> None:
        manager = EnvironmentManager({"OMO_CONFIG_DIR": "/tmp/omo"})

        self.assertEqual(manager.user_config_file(), Path("/tmp/omo/oh-my-opencode.json"))

    def test_platform_config_dir_by_default(self) -> None:
        path = EnvironmentManager({}).user_config_file()

        self.assertEqual(path.name, "oh-my-opencode.json")
        self.assertEqual(path.parent.name, "opencode")

    def test_log_level_resolution(self) -> None:
        self.assertEqual(EnvironmentManager({}).resolve_log_level(), logging.WARNING)
        self.assertEqual(EnvironmentManager({}).resolve_log_level(verbose=True), logging.DEBUG)
        self.assertEqual(
            EnvironmentManager({"OMO_CONFIG_LOG_LEVEL": " Standard "}).resolve_log_level(),
            logging.INFO,
        )
        self.assertEqual(
            EnvironmentManager({"OMO_CONFIG_LOG_LEVEL": "loud"}).resolve_log_level(default=logging.ERROR),
            logging.ERROR,
        )


if __name__ == "__main__":
    unittest.main()
