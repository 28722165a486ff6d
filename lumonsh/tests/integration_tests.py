#!/usr/bin/env python3
"""
LUMON Shell Integration Tests

End-to-end runs of single commands and pipelines. Every test installs
the utility programs into a fresh command root and lets the runner fork
and exec them for real.

Run with: python -m pytest lumonsh/tests/integration_tests.py -v
Or: python lumonsh/tests/integration_tests.py

Author: LUMON Shell Developers
Version: 1.0.0
"""

import os
import shutil
import signal
import sys
import tempfile
import threading
import unittest

# Add the project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from lumonsh.core.config_loader import Config
from lumonsh.exceptions import (
    ForkError,
    PathResolutionError,
    PipeError,
    RedirectionError,
    UnsupportedRedirectionError,
)
from lumonsh.filesystem import PathResolver
from lumonsh.process import ProcessManager
from lumonsh.progs import install_commands
from lumonsh.shell import CommandParser, CommandRunner, Shell
from lumonsh.syscalls import SyscallInterface, SyscallNumber


NOTES = "alpha beta\ngamma\n"


def _open_descriptors():
    return len(os.listdir('/proc/self/fd'))


class PipeRefusingSyscalls(SyscallInterface):
    """Kernel interface whose pipe call always fails."""

    def create_pipe(self):
        raise PipeError("pipe failed: Too many open files", errno=24)


class ForkFailingManager(ProcessManager):
    """Process manager whose Nth spawn fails."""

    def __init__(self, syscalls, fail_on):
        super().__init__(syscalls)
        self._fail_on = fail_on
        self._attempts = 0

    def spawn(self, argv, remapped=()):
        self._attempts += 1
        if self._attempts == self._fail_on:
            raise ForkError("fork failed: Resource temporarily unavailable",
                            parent_pid=os.getpid())
        return super().spawn(argv, remapped)


class RunnerTestCase(unittest.TestCase):
    """Fresh command root with the utility programs installed."""

    def setUp(self):
        self.root = tempfile.mkdtemp()
        install_commands(self.root)
        self.syscalls = SyscallInterface()
        self.processes = ProcessManager(self.syscalls)
        self.runner = CommandRunner(
            parser=CommandParser(),
            resolver=PathResolver(self.root),
            syscalls=self.syscalls,
            processes=self.processes,
        )
        self.write('notes', NOTES)

    def tearDown(self):
        shutil.rmtree(self.root)

    def path(self, name):
        return os.path.join(self.root, name)

    def write(self, name, content):
        with open(self.path(name), 'w') as f:
            f.write(content)

    def read(self, name):
        with open(self.path(name)) as f:
            return f.read()

    def write_program(self, name, source):
        """Install an executable script under the root."""
        self.write(name, source)
        os.chmod(self.path(name), 0o755)


class TestSingleCommand(RunnerTestCase):
    """Test one command with redirections."""

    def test_output_redirection(self):
        """Test stdout goes to the target file."""
        result = self.runner.run_single("echo hi there > greet")

        self.assertEqual(result.status, 0)
        self.assertEqual(self.read('greet'), "hi there\n")
        self.assertEqual(result.children[0].argv[0], self.path('echo'))

    def test_input_and_output(self):
        """Test both streams redirected at once."""
        result = self.runner.run_single("wc < notes > count")

        self.assertEqual(result.status, 0)
        self.assertEqual(self.read('count'), "2\t3\t17\n")

    def test_output_truncated(self):
        """Test an existing target is truncated."""
        self.write('greet', "a much longer previous content\n")

        self.runner.run_single("echo x > greet")

        self.assertEqual(self.read('greet'), "x\n")

    def test_program_arguments_resolved(self):
        """Test programs resolve their own file arguments under the root."""
        result = self.runner.run_single("cat /notes > copy")

        self.assertEqual(result.status, 0)
        self.assertEqual(self.read('copy'), NOTES)

    def test_missing_input_file(self):
        """Test a missing input target fails before any process exists."""
        result = self.runner.run_single("cat < absent")

        self.assertEqual(result.status, 1)
        self.assertIsInstance(result.error, RedirectionError)
        self.assertFalse(result.spawned)
        self.assertEqual(self.syscalls.count(SyscallNumber.FORK), 0)

    def test_invalid_program_path(self):
        """Test a root-only program name fails before any process exists."""
        result = self.runner.run_single("/ arg")

        self.assertEqual(result.status, 1)
        self.assertIsInstance(result.error, PathResolutionError)
        self.assertEqual(self.processes.spawned_count, 0)

    def test_missing_program(self):
        """Test the child exits 127 when the program cannot be opened."""
        result = self.runner.run_single("nosuchprogram")

        self.assertEqual(result.status, 127)
        self.assertTrue(result.children[0].is_reaped)

    def test_program_not_executable(self):
        """Test the child exits 126 when the image cannot be executed."""
        self.write('plain', "just text\n")
        os.chmod(self.path('plain'), 0o644)

        result = self.runner.run_single("plain")

        self.assertEqual(result.status, 126)

    def test_program_failure_status(self):
        """Test a program's own failure status is reported."""
        result = self.runner.run_single("rm absent")

        self.assertEqual(result.status, 1)
        self.assertIsNone(result.error)

    def test_empty_line(self):
        """Test a blank or marker-only line is a no-op."""
        for line in ("", "   ", "\t", "> out"):
            result = self.runner.run_single(line)
            self.assertEqual(result.status, 0)
            self.assertFalse(result.spawned)

        self.assertEqual(self.syscalls.count(SyscallNumber.FORK), 0)
        self.assertFalse(os.path.exists(self.path('out')))

    @unittest.skipUnless(os.path.isdir('/proc/self/fd'), "needs /proc/self/fd")
    def test_no_descriptor_leak(self):
        """Test the shell holds no extra descriptors after a command."""
        before = _open_descriptors()

        self.runner.run_single("wc < notes > count")
        self.runner.run_single("cat < absent")
        self.runner.run_pipeline("cat notes", "wc > count")
        self.runner.run_pipeline("cat > x", "wc")

        self.assertEqual(_open_descriptors(), before)


class TestPipeline(RunnerTestCase):
    """Test two-stage pipelines."""

    def test_producer_to_consumer(self):
        """Test the right program reads what the left one writes."""
        result = self.runner.run_pipeline("cat notes", "cat > copy")

        self.assertEqual(result.status, 0)
        self.assertEqual(result.exit_codes, [0, 0])
        self.assertEqual(self.read('copy'), NOTES)

    def test_left_input_redirection(self):
        """Test the left side may read from a file."""
        result = self.runner.run_pipeline("cat < notes", "wc > count")

        self.assertEqual(result.status, 0)
        self.assertEqual(self.read('count'), "2\t3\t17\n")

    def test_xargs(self):
        """Test xargs builds a command line from piped words."""
        result = self.runner.run_pipeline("echo a b", "xargs echo x > out")

        self.assertEqual(result.status, 0)
        self.assertEqual(self.read('out'), "x a b\n")

    def test_left_output_rejected(self):
        """Test output redirection on the left is rejected up front."""
        result = self.runner.run_pipeline("cat notes > x", "wc")

        self.assertEqual(result.status, 1)
        self.assertIsInstance(result.error, UnsupportedRedirectionError)
        self.assertEqual(self.syscalls.count(SyscallNumber.PIPE), 0)
        self.assertEqual(self.processes.spawned_count, 0)
        self.assertFalse(os.path.exists(self.path('x')))

    def test_right_input_rejected(self):
        """Test input redirection on the right is rejected up front."""
        result = self.runner.run_pipeline("cat notes", "wc < notes")

        self.assertIsInstance(result.error, UnsupportedRedirectionError)
        self.assertEqual(self.syscalls.count(SyscallNumber.PIPE), 0)
        self.assertEqual(self.processes.spawned_count, 0)

    def test_missing_left_input(self):
        """Test a missing left input fails before the pipe exists."""
        result = self.runner.run_pipeline("cat < absent", "wc")

        self.assertIsInstance(result.error, RedirectionError)
        self.assertEqual(self.syscalls.count(SyscallNumber.PIPE), 0)
        self.assertEqual(self.processes.spawned_count, 0)

    def test_right_output_failure(self):
        """Test a bad right target fails the right child only."""
        result = self.runner.run_pipeline("echo hi", "cat > /nodir/out")

        self.assertEqual(result.status, 1)
        self.assertEqual(len(result.children), 2)
        self.assertTrue(all(c.is_reaped for c in result.children))
        self.assertEqual(self.processes.live_count, 0)

    @unittest.skipUnless(os.path.exists('/bin/sh'), "needs /bin/sh")
    def test_reader_exits_early(self):
        """Test an endless producer stops once its reader is gone."""
        self.write_program('yes', "#!/bin/sh\nwhile :; do echo y; done\n")
        self.write_program('two', f"#!{sys.executable}\nimport os\nos.read(0, 2)\n")

        def give_up(signum, frame):
            raise TimeoutError("pipeline did not finish")

        previous = signal.signal(signal.SIGALRM, give_up)
        signal.alarm(30)
        try:
            result = self.runner.run_pipeline("yes", "two")
        finally:
            signal.alarm(0)
            signal.signal(signal.SIGALRM, previous)
            for proc in self.processes.list_processes():
                os.kill(proc['pid'], signal.SIGKILL)

        left, right = result.children
        self.assertEqual(result.status, 0)
        self.assertTrue(left.killed_by_signal)
        self.assertEqual(left.exit_code, -signal.SIGPIPE)
        self.assertEqual(right.exit_code, 0)

    def test_empty_side(self):
        """Test a pipeline with an empty side is a no-op."""
        for left, right in (("", "wc"), ("cat notes", "  "), ("> x", "wc")):
            result = self.runner.run_pipeline(left, right)
            self.assertFalse(result.spawned)

        self.assertEqual(self.syscalls.count(SyscallNumber.PIPE), 0)


class TestPipelineSetupFailures(RunnerTestCase):
    """Test the pipeline's recovery when the pipe or a fork fails."""

    def setUp(self):
        super().setUp()
        self.baseline = _open_descriptors() if os.path.isdir('/proc/self/fd') else None

    def make_runner(self, syscalls=None, processes=None):
        syscalls = syscalls or SyscallInterface()
        self.processes = processes or ProcessManager(syscalls)
        return CommandRunner(
            parser=CommandParser(),
            resolver=PathResolver(self.root),
            syscalls=syscalls,
            processes=self.processes,
        )

    def assertDescriptorsRestored(self):
        if self.baseline is not None:
            self.assertEqual(_open_descriptors(), self.baseline)

    def test_pipe_failure(self):
        """Test a failed pipe call closes the left input and starts nothing."""
        runner = self.make_runner(syscalls=PipeRefusingSyscalls())

        result = runner.run_pipeline("cat < notes", "wc")

        self.assertEqual(result.status, 1)
        self.assertIsInstance(result.error, PipeError)
        self.assertEqual(self.processes.spawned_count, 0)
        self.assertDescriptorsRestored()

    def test_left_fork_failure(self):
        """Test a failed left fork closes the pipe and the left input."""
        syscalls = SyscallInterface()
        runner = self.make_runner(syscalls, ForkFailingManager(syscalls, fail_on=1))

        result = runner.run_pipeline("cat < notes", "wc > count")

        self.assertEqual(result.status, 1)
        self.assertIsInstance(result.error, ForkError)
        self.assertFalse(result.spawned)
        self.assertEqual(self.processes.live_count, 0)
        self.assertDescriptorsRestored()

    def test_right_fork_failure(self):
        """Test a failed right fork still reaps the left child."""
        syscalls = SyscallInterface()
        runner = self.make_runner(syscalls, ForkFailingManager(syscalls, fail_on=2))

        result = runner.run_pipeline("cat notes", "wc > count")

        self.assertEqual(result.status, 1)
        self.assertIsInstance(result.error, ForkError)
        self.assertEqual(len(result.children), 1)
        self.assertTrue(result.children[0].is_reaped)
        self.assertEqual(self.processes.live_count, 0)
        self.assertFalse(os.path.exists(self.path('count')))
        self.assertDescriptorsRestored()


class TestShell(RunnerTestCase):
    """Test the line dispatcher end to end."""

    def setUp(self):
        super().setUp()
        self.shell = Shell(runner=self.runner, config=Config())

    def test_pipeline_line(self):
        """Test a line with a pipe runs as a pipeline."""
        status = self.shell.execute_line("  echo hello | cat > out  ")

        self.assertEqual(status, 0)
        self.assertEqual(self.read('out'), "hello\n")
        self.assertEqual(len(self.shell.last_result.children), 2)

    def test_blank_line(self):
        """Test blank lines create nothing."""
        self.assertEqual(self.shell.execute_line("   "), 0)
        self.assertEqual(self.processes.spawned_count, 0)

    def test_failure_keeps_shell_alive(self):
        """Test a failed line does not stop later lines."""
        self.assertEqual(self.shell.execute_line("cat < absent"), 1)
        self.assertEqual(self.shell.execute_line("echo ok > out"), 0)
        self.assertEqual(self.read('out'), "ok\n")

    def test_script_stops_at_exit(self):
        """Test lines after the exit keyword are not run."""
        self.shell.run_script("echo a > f\nexit\necho b > f")

        self.assertTrue(self.shell.exiting)
        self.assertEqual(self.read('f'), "a\n")

    def test_interrupt_during_wait(self):
        """Test Ctrl-C reaches the running program and the shell carries on."""
        self.write_program('nap', f"#!{sys.executable}\nimport time\ntime.sleep(5)\n")

        handler = signal.getsignal(signal.SIGINT)
        timer = threading.Timer(0.5, os.kill, (os.getpid(), signal.SIGINT))
        timer.start()
        try:
            status = self.shell.execute_line("echo x | nap")
        finally:
            timer.join()

        self.assertEqual(status, -signal.SIGINT)
        self.assertEqual(self.processes.live_count, 0)
        self.assertTrue(all(c.is_reaped for c in self.shell.last_result.children))
        self.assertIs(signal.getsignal(signal.SIGINT), handler)

        self.assertEqual(self.shell.execute_line("echo ok > out"), 0)
        self.assertEqual(self.read('out'), "ok\n")

    def test_touch_then_rm(self):
        """Test the file utilities through the shell."""
        self.assertEqual(self.shell.execute_line("touch made"), 0)
        self.assertTrue(os.path.exists(self.path('made')))

        self.assertEqual(self.shell.execute_line("rm made"), 0)
        self.assertFalse(os.path.exists(self.path('made')))


def run_tests():
    """Run all tests."""
    loader = unittest.TestLoader()
    suite = loader.loadTestsFromModule(sys.modules[__name__])

    runner = unittest.TextTestRunner(verbosity=2)
    result = runner.run(suite)

    return 0 if result.wasSuccessful() else 1


if __name__ == '__main__':
    sys.exit(run_tests())
