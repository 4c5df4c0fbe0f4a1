"""Tests for command library."""

import asyncio

import pytest

from playground.command import Command, run
from playground.exceptions import CommandException, KubectlException


async def test_command() -> None:
    """Test stdout parsing of a command."""
    result = await run(Command(["echo", "Hello"]))
    assert result == "Hello\n"


async def test_command_stdin() -> None:
    """Test passing stdin to a command."""
    result = await run(Command(["sed", "s/Hello/Goodbye/"]), stdin=b"Hello\n")
    assert result == "Goodbye\n"


async def test_failed_command() -> None:
    """Test a failing command."""
    with pytest.raises(CommandException, match="return code 1") as exc:
        await run(Command(["/bin/false"]))
    assert exc.value.returncode == 1


async def test_failed_command_stderr() -> None:
    """Test stderr and the exception type of a failing command."""
    with pytest.raises(KubectlException) as exc:
        await run(
            Command(["sh", "-c", "echo oops >&2; exit 3"], exc=KubectlException)
        )
    assert exc.value.returncode == 3
    assert exc.value.stderr == "oops\n"


async def test_command_timeout() -> None:
    """Test a command that does not finish in time."""
    with pytest.raises(CommandException, match="timed out"):
        await run(Command(["sleep", "10"]), timeout=0.1)


async def test_cancelled_command() -> None:
    """Test cancelling a running command."""
    task = asyncio.create_task(run(Command(["sleep", "10"])))
    await asyncio.sleep(0.1)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
