"""
Subprocess invoker for the external analysis programs.

Pattern:
  - interpreter runs with -u so each line reaches us as soon as it is printed
  - stdout and stderr are drained concurrently (a full stderr pipe would
    otherwise stall the child)
  - optional hard timeout; on timeout or cancellation the child is killed
  - the process is always reaped before we return or raise
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from analysis_bridge.errors import ExecutionFailure, ExecutionTimeout

logger = logging.getLogger(__name__)

# asyncio's default 64 KiB line limit is too small for a full backtest summary
MAX_LINE_BYTES = 16 * 1024 * 1024
STDERR_TAIL_LINES = 20


@dataclass(frozen=True)
class ProcessInvocation:
    executable: str
    script_path: str
    arguments: tuple[str, ...] = ()
    interpreter_options: tuple[str, ...] = ("-u",)

    def command(self) -> list[str]:
        return [self.executable, *self.interpreter_options, self.script_path, *self.arguments]


async def _read_lines(stream: asyncio.StreamReader, label: str) -> list[str]:
    lines: list[str] = []
    async for raw in stream:
        line = raw.decode("utf-8", errors="replace").rstrip("\r\n")
        logger.debug("[%s] %s", label, line)
        lines.append(line)
    return lines


async def _collect(proc: asyncio.subprocess.Process) -> tuple[list[str], list[str]]:
    stdout, stderr = await asyncio.gather(
        _read_lines(proc.stdout, "stdout"),
        _read_lines(proc.stderr, "stderr"),
    )
    await proc.wait()
    return stdout, stderr


async def _reap(proc: asyncio.subprocess.Process) -> None:
    if proc.returncode is None:
        try:
            proc.kill()
        except ProcessLookupError:
            pass
    await proc.wait()


async def invoke(invocation: ProcessInvocation, timeout_seconds: Optional[float] = None) -> list[str]:
    """
    Run the program to completion and return every stdout line in emission order.

    Args:
        invocation:      What to run.
        timeout_seconds: Kill the child after this long. None waits indefinitely.

    Returns:
        Captured stdout lines, trailing newlines stripped.

    Raises:
        ExecutionTimeout: if the timeout elapsed.
        ExecutionFailure: if the program could not start, exited non-zero,
                          or produced no output.
    """
    cmd = invocation.command()
    logger.info("spawning %s", " ".join(cmd))

    try:
        proc = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            limit=MAX_LINE_BYTES,
        )
    except OSError as e:
        raise ExecutionFailure(f"could not start {invocation.executable}: {e}", cause=e) from e

    try:
        stdout, stderr = await asyncio.wait_for(_collect(proc), timeout=timeout_seconds)
    except asyncio.TimeoutError as e:
        raise ExecutionTimeout(
            f"{invocation.script_path} exceeded {timeout_seconds}s timeout", cause=e
        ) from e
    except ValueError as e:
        raise ExecutionFailure(
            f"{invocation.script_path} wrote a line longer than {MAX_LINE_BYTES} bytes", cause=e
        ) from e
    finally:
        await _reap(proc)

    if proc.returncode != 0:
        raise ExecutionFailure(
            f"{invocation.script_path} exited with status {proc.returncode}",
            returncode=proc.returncode,
            stderr=stderr[-STDERR_TAIL_LINES:],
        )
    if not stdout:
        raise ExecutionFailure(
            f"{invocation.script_path} produced no output",
            returncode=proc.returncode,
            stderr=stderr[-STDERR_TAIL_LINES:],
        )

    logger.info("%s finished with %d output lines", invocation.script_path, len(stdout))
    return stdout
