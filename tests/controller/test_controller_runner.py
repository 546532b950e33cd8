import sys
import unittest
from pathlib import Path

from packsync.controller import CommandRunner
from packsync.errors import CommandTimeoutError, ExecutableNotFoundError

PYTHON = Path(sys.executable)


class TestCommandRunner(unittest.TestCase):
    def test_captures_output_and_exit_code(self) -> None:
        runner = CommandRunner(str(PYTHON))
        result = runner.run(["-c", "import sys; print('out'); sys.stderr.write('err'); sys.exit(3)"])
        self.assertEqual(result.returncode, 3)
        self.assertFalse(result.ok)
        self.assertEqual(result.stdout.strip(), "out")
        self.assertEqual(result.stderr.strip(), "err")
        self.assertEqual(result.args[0], str(PYTHON))

    def test_runs_in_cwd(self) -> None:
        runner = CommandRunner(str(PYTHON))
        result = runner.run(["-c", "import os; print(os.getcwd())"], cwd=PYTHON.parent)
        self.assertEqual(Path(result.stdout.strip()).resolve(), PYTHON.parent.resolve())

    def test_missing_executable(self) -> None:
        runner = CommandRunner("packsync-no-such-tool-xyz")
        with self.assertRaises(ExecutableNotFoundError):
            runner.run(["--help"])

    def test_search_path_used_for_resolution(self) -> None:
        runner = CommandRunner(PYTHON.name, search_path=str(PYTHON.parent))
        self.assertTrue(runner.resolve())

        empty = runner.with_search_path(str(Path(__file__).parent))
        with self.assertRaises(ExecutableNotFoundError):
            empty.resolve()

    def test_extra_env_reaches_child(self) -> None:
        runner = CommandRunner(str(PYTHON), extra_env={"PACKSYNC_TEST_VALUE": "42"})
        result = runner.run(["-c", "import os; print(os.environ['PACKSYNC_TEST_VALUE'])"])
        self.assertEqual(result.stdout.strip(), "42")

    def test_timeout(self) -> None:
        runner = CommandRunner(str(PYTHON), timeout=0.5)
        with self.assertRaises(CommandTimeoutError) as cm:
            runner.run(["-c", "import time; time.sleep(10)"])
        self.assertEqual(cm.exception.details["timeout"], 0.5)


if __name__ == "__main__":
    unittest.main()
