"""Run detected blocks as single, atomic programs.

Two modes:
- file: write the block to a temp file with the runner's extension, run
  the runner's command template through the shell, clean up afterwards.
- shell: send the block to a persistent bash session wrapped in ``{ ... }``
  so the shell treats all lines as one compound command. Non-shell
  languages are written to a temp file and their runner command is sent
  instead.

A process-wide executor is shared between runs when reuse is enabled; see
get_executor() / close_executor().
"""

from __future__ import annotations

import logging
import subprocess
import tempfile
import time
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from blockrun.core.exceptions import ExecutorError
from blockrun.detection.types import Block
from blockrun.runners.registry import RunnerDefinition

if TYPE_CHECKING:
    from blockrun.config import BlockRunConfig

logger = logging.getLogger(__name__)

SHELL_LANGUAGE = "shellscript"
DEFAULT_SHELL = "bash"

# Seconds to wait for a shell session to exit before killing it
_SHELL_CLOSE_TIMEOUT = 5


@dataclass(frozen=True, slots=True)
class ExecutionResult:
    """Outcome of running one block.

    Attributes:
        command: Command line that was run (or sent to the shell session).
        returncode: Exit status; None in shell mode, where the session
            keeps running and the block's status is not observed.
        duration: Wall-clock seconds spent launching and (in file mode)
            waiting for the command.

    """

    command: str
    returncode: int | None
    duration: float

    @property
    def succeeded(self) -> bool:
        """True if the command exited with status 0."""
        return self.returncode == 0


def wrap_compound(code: str) -> str:
    """Wrap code so a POSIX shell runs it as one compound command."""
    return f"{{ {code}\n}}\n"


def _write_temp_file(code: str, ext: str) -> Path:
    """Write code to a new temp file and return its path."""
    with tempfile.NamedTemporaryFile(
        "w", suffix=ext, prefix="blockrun-", delete=False, encoding="utf-8"
    ) as tmp:
        tmp.write(code)
        tmp.write("\n")
    return Path(tmp.name)


def _cleanup(path: Path) -> None:
    """Remove a temp file and the compiled artifact some runners leave."""
    for candidate in (path, Path(f"{path}.out")):
        try:
            candidate.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("Could not remove %s: %s", candidate, e)


class ShellSession:
    """A long-lived shell process fed through its stdin."""

    def __init__(self, shell: str = DEFAULT_SHELL) -> None:
        self._shell = shell
        self._process: subprocess.Popen[str] | None = None

    @property
    def started(self) -> bool:
        """True once the shell process has been launched."""
        return self._process is not None

    @property
    def is_alive(self) -> bool:
        """True while the shell process is running."""
        return self._process is not None and self._process.poll() is None

    def _start(self) -> subprocess.Popen[str]:
        try:
            process = subprocess.Popen(
                [self._shell],
                stdin=subprocess.PIPE,
                text=True,
            )
        except FileNotFoundError as e:
            raise ExecutorError(f"Shell not found: {self._shell}") from e
        logger.debug("Started %s session (pid %s)", self._shell, process.pid)
        self._process = process
        return process

    def send(self, text: str) -> None:
        """Send text to the shell, starting the session on first use.

        Raises:
            ExecutorError: If the shell cannot be started or its stdin
                is closed.

        """
        process = self._process if self.is_alive else self._start()
        if process.stdin is None:
            raise ExecutorError("Shell session has no stdin")
        try:
            process.stdin.write(text)
            process.stdin.flush()
        except (BrokenPipeError, OSError) as e:
            raise ExecutorError(f"Shell session closed: {e}") from e

    def close(self, timeout: float | None = _SHELL_CLOSE_TIMEOUT) -> None:
        """Close stdin and wait for the shell to exit.

        Args:
            timeout: Seconds to wait before killing the shell
                (None = wait until queued commands finish).

        """
        process = self._process
        self._process = None
        if process is None:
            return
        if process.stdin is not None:
            try:
                process.stdin.close()
            except OSError:
                logger.debug("Shell stdin already closed")
        try:
            process.wait(timeout=timeout)
        except subprocess.TimeoutExpired:
            logger.warning("Shell session did not exit, killing pid %s", process.pid)
            process.kill()
            process.wait()


class BlockExecutor:
    """Execute blocks with the runners of one registry snapshot.

    Example:
        >>> executor = BlockExecutor(build_registry())
        >>> result = executor.run(block)
        >>> result.returncode
        0

    """

    def __init__(
        self,
        runners: Mapping[str, RunnerDefinition],
        mode: Literal["file", "shell"] = "file",
        timeout: int | None = None,
        shell: str = DEFAULT_SHELL,
    ) -> None:
        self.runners = runners
        self.mode = mode
        self.timeout = timeout
        self._session = ShellSession(shell) if mode == "shell" else None
        self._closed = False
        self.config: BlockRunConfig | None = None

    @classmethod
    def from_config(cls, config: BlockRunConfig) -> BlockExecutor:
        """Create an executor from configuration."""
        executor = cls(
            config.registry(),
            mode=config.executor_mode,
            timeout=config.timeout,
        )
        executor.config = config
        return executor

    @property
    def is_closed(self) -> bool:
        """True after close(), or once a started shell session has exited."""
        if self._closed:
            return True
        session = self._session
        return session is not None and session.started and not session.is_alive

    def run(self, block: Block) -> ExecutionResult:
        """Run all lines of a block as one unit.

        Args:
            block: Block from find_blocks().

        Returns:
            ExecutionResult. A non-zero exit status is reported, not raised.

        Raises:
            ExecutorError: If the executor is closed, no runner exists for
                the block's language, the command cannot start, or the
                timeout expires.

        """
        if self.is_closed:
            raise ExecutorError("Executor is closed")

        runner = self.runners.get(block.language_id)
        if runner is None:
            available = ", ".join(sorted(self.runners))
            raise ExecutorError(
                f"No runner for language '{block.language_id}'. Available: {available}"
            )

        logger.info(
            "Running %s block (lines %d-%d) in %s mode",
            block.language_id,
            block.start_line + 1,
            block.end_line + 1,
            self.mode,
        )
        if self._session is not None:
            return self._run_in_shell(block, runner, self._session)
        return self._run_file(block, runner)

    def _run_file(self, block: Block, runner: RunnerDefinition) -> ExecutionResult:
        path = _write_temp_file(block.code, runner.ext)
        command = runner.render(str(path))
        logger.debug("Command: %s", command)
        start = time.perf_counter()
        try:
            completed = subprocess.run(command, shell=True, timeout=self.timeout)
        except subprocess.TimeoutExpired as e:
            raise ExecutorError(
                f"Block timed out after {self.timeout}s: {command}"
            ) from e
        except OSError as e:
            raise ExecutorError(f"Cannot start command '{command}': {e}") from e
        finally:
            _cleanup(path)

        duration = time.perf_counter() - start
        if completed.returncode != 0:
            logger.info("Command exited with status %d", completed.returncode)
        return ExecutionResult(
            command=command, returncode=completed.returncode, duration=duration
        )

    def _run_in_shell(
        self, block: Block, runner: RunnerDefinition, session: ShellSession
    ) -> ExecutionResult:
        path: Path | None = None
        if block.language_id == SHELL_LANGUAGE:
            command = wrap_compound(block.code)
        else:
            # The session removes the temp file once the runner has finished
            path = _write_temp_file(block.code, runner.ext)
            command = wrap_compound(
                f'{runner.render(str(path))}; rm -f "{path}" "{path}.out"'
            )
        start = time.perf_counter()
        try:
            session.send(command)
        except ExecutorError:
            if path is not None:
                _cleanup(path)
            raise
        return ExecutionResult(
            command=command, returncode=None, duration=time.perf_counter() - start
        )

    def close(self, timeout: float | None = _SHELL_CLOSE_TIMEOUT) -> None:
        """Release the shell session; the executor cannot run blocks afterwards."""
        if self._session is not None:
            self._session.close(timeout)
        self._closed = True


_shared_executor: BlockExecutor | None = None


def get_executor(config: BlockRunConfig) -> BlockExecutor:
    """Return an executor for config.

    With reuse_executor enabled the same instance is returned on every
    call until it is closed, its shell session exits, or the configuration
    changes. Otherwise a fresh executor is created each time.
    """
    global _shared_executor

    if not config.reuse_executor:
        return BlockExecutor.from_config(config)

    shared = _shared_executor
    if shared is not None and not shared.is_closed and shared.config == config:
        return shared

    if shared is not None and not shared.is_closed:
        logger.debug("Configuration changed, replacing shared executor")
        shared.close()

    _shared_executor = BlockExecutor.from_config(config)
    return _shared_executor


def close_executor(timeout: float | None = _SHELL_CLOSE_TIMEOUT) -> None:
    """Close and forget the shared executor, if any."""
    global _shared_executor

    if _shared_executor is not None:
        _shared_executor.close(timeout)
        _shared_executor = None
