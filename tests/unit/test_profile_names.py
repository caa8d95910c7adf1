import unittest

from omoconfig.core.errors import ProfileNameError
from omoconfig.core.profiles import validate_profile_name
from omoconfig.core.profiles.names import profile_name_problem


class ValidateProfileNameTests(unittest.TestCase):
    def test_accepts_letters_digits_hyphen_underscore(self) -> None:
        for name in ("work", "Work-2", "client_a", "x", "a" * 32):
            with self.subTest(name=name):
                validate_profile_name(name)

    def test_length_bounds(self) -> None:
        for name in ("", "a" * 33):
            with self.subTest(name=name):
                with self.assertRaises(ProfileNameError) as context:
                    validate_profile_name(name)
                self.assertEqual(context.exception.reason, "must be between 1 and 32 characters")

    def test_rejects_other_characters(self) -> None:
        for name in ("my profile", "../etc", "work.json", "naïve", "a/b"):
            with self.subTest(name=name):
                with self.assertRaises(ProfileNameError) as context:
                    validate_profile_name(name)
                self.assertIn("only letters, numbers, hyphens, and underscores", context.exception.reason)

    def test_reserved_names_are_case_sensitive(self) -> None:
        for name in ("default", "backup", "temp", "current", "oh-my-opencode"):
            with self.subTest(name=name):
                with self.assertRaises(ProfileNameError) as context:
                    validate_profile_name(name)
                self.assertEqual(context.exception.reason, "is a reserved name")

        validate_profile_name("Default")
        validate_profile_name("BACKUP")

    def test_existing_profiles_may_be_default(self) -> None:
        validate_profile_name("default", existing=True)

        with self.assertRaises(ProfileNameError):
            validate_profile_name("backup", existing=True)

    def test_problem_message_for_prompts(self) -> None:
        self.assertIsNone(profile_name_problem("work"))
        self.assertEqual(profile_name_problem("temp"), "Profile name is a reserved name")
        self.assertEqual(profile_name_problem(None), "Profile name must be between 1 and 32 characters")


if __name__ == "__main__":
    unittest.main()
