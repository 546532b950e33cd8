import tempfile
import unittest
from pathlib import Path

from packsync.errors import EmptyError, InvalidProfileError, NotFoundError
from packsync.local import ProfileLocator


class RecordingMenu:
    def __init__(self) -> None:
        self.offered = None

    def choose(self, profiles):
        self.offered = profiles
        return next(p for p in profiles if p.valid)


class FakePicker:
    def __init__(self, result=None, error=None) -> None:
        self.result = result
        self.error = error
        self.initial_dirs = []

    def pick(self, initial_dir):
        self.initial_dirs.append(initial_dir)
        if self.error is not None:
            raise self.error
        return self.result


class TestProfileLocator(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name) / "profiles"
        self.root.mkdir()

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _profile_dir(self, name: str, with_marker: bool = True) -> Path:
        path = self.root / name
        path.mkdir()
        if with_marker:
            (path / "mods").mkdir()
        return path

    def _locator(self) -> ProfileLocator:
        return ProfileLocator(self.root, "mods", excluded_names=("_backups",))

    def test_missing_root(self) -> None:
        locator = ProfileLocator(self.root / "nope", "mods")
        with self.assertRaises(NotFoundError):
            locator.list_profiles()

    def test_empty_root_fails_without_prompting(self) -> None:
        (self.root / "readme.txt").write_text("not a dir", encoding="utf-8")
        menu = RecordingMenu()
        picker = FakePicker()
        with self.assertRaises(EmptyError):
            self._locator().select(menu, picker=picker)
        self.assertIsNone(menu.offered)
        self.assertEqual(picker.initial_dirs, [])

    def test_backups_folder_is_not_a_profile(self) -> None:
        (self.root / "_backups").mkdir()
        with self.assertRaises(EmptyError):
            self._locator().list_profiles()

    def test_profiles_sorted_by_name(self) -> None:
        self._profile_dir("Zeta")
        self._profile_dir("Alpha")
        self._profile_dir("Mid", with_marker=False)

        profiles = self._locator().list_profiles()

        self.assertEqual([p.name for p in profiles], ["Alpha", "Mid", "Zeta"])
        self.assertEqual([p.valid for p in profiles], [True, False, True])

    def test_validate(self) -> None:
        good = self._profile_dir("Good")
        bad = self._profile_dir("Bad", with_marker=False)
        self.assertEqual(self._locator().validate(good).name, "Good")
        with self.assertRaises(InvalidProfileError):
            self._locator().validate(bad)

    def test_picker_valid_choice(self) -> None:
        good = self._profile_dir("Good")
        menu = RecordingMenu()
        profile = self._locator().select(menu, picker=FakePicker(result=good))
        self.assertEqual(profile.path, good)
        self.assertIsNone(menu.offered)

    def test_picker_invalid_choice_is_hard_failure(self) -> None:
        self._profile_dir("Good")
        bad = self._profile_dir("Bad", with_marker=False)
        menu = RecordingMenu()
        with self.assertRaises(InvalidProfileError):
            self._locator().select(menu, picker=FakePicker(result=bad))
        self.assertIsNone(menu.offered)

    def test_picker_cancel_falls_back_to_menu(self) -> None:
        self._profile_dir("Good")
        menu = RecordingMenu()
        picker = FakePicker(result=None)
        profile = self._locator().select(menu, picker=picker)
        self.assertEqual(profile.name, "Good")
        self.assertEqual(picker.initial_dirs, [self.root])
        self.assertIsNotNone(menu.offered)

    def test_picker_error_falls_back_to_menu(self) -> None:
        self._profile_dir("Good")
        menu = RecordingMenu()
        with self.assertLogs("packsync.local.profiles", level="WARNING"):
            profile = self._locator().select(menu, picker=FakePicker(error=RuntimeError("no display")))
        self.assertEqual(profile.name, "Good")

    def test_no_picker_uses_menu(self) -> None:
        self._profile_dir("Good")
        menu = RecordingMenu()
        self.assertEqual(self._locator().select(menu).name, "Good")


if __name__ == "__main__":
    unittest.main()
