"""Tests for subprocess command execution."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from cestplane.testing.executor import CommandExecutor, build_env, split_command

PY = sys.executable


class TestSplitCommand:
    def test_whitespace_split_keeps_backslashes(self) -> None:
        assert split_command("php  vendor/bin/codecept run App\\FooCest:a") == [
            "php",
            "vendor/bin/codecept",
            "run",
            "App\\FooCest:a",
        ]

    def test_blank_is_empty(self) -> None:
        assert split_command("   ") == []


class TestBuildEnv:
    def test_overlay_layered_over_process_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CEST_BASE", "1")

        env = build_env({"XDEBUG_MODE": "coverage"})

        assert env["CEST_BASE"] == "1"
        assert env["XDEBUG_MODE"] == "coverage"


@pytest.mark.integration
class TestCommandExecutor:
    @pytest.mark.asyncio
    async def test_given_command_then_stdout_and_exit_code_captured(self, tmp_path: Path) -> None:
        executor = CommandExecutor(tmp_path)

        result = await executor.execute(f"{PY} -c print('Successful:1')")

        assert result.stdout.strip() == "Successful:1"
        assert result.exit_code == 0
        assert result.timed_out is False

    @pytest.mark.asyncio
    async def test_given_nonzero_exit_then_not_an_error(self, tmp_path: Path) -> None:
        executor = CommandExecutor(tmp_path)

        result = await executor.execute(
            f"{PY} -c __import__('sys').stderr.write('boom');__import__('sys').exit(3)"
        )

        assert result.stderr == "boom"
        assert result.exit_code == 3

    @pytest.mark.asyncio
    async def test_given_env_overlay_then_visible_to_process(self, tmp_path: Path) -> None:
        executor = CommandExecutor(tmp_path, env={"CEST_MARKER": "xyz"})

        result = await executor.execute(f"{PY} -c print(__import__('os').environ['CEST_MARKER'])")

        assert result.stdout.strip() == "xyz"

    @pytest.mark.asyncio
    async def test_given_workspace_then_used_as_cwd(self, tmp_path: Path) -> None:
        executor = CommandExecutor(tmp_path)

        result = await executor.execute(f"{PY} -c print(__import__('os').getcwd())")

        assert Path(result.stdout.strip()).resolve() == tmp_path.resolve()

    @pytest.mark.asyncio
    async def test_given_missing_program_then_spawn_error_normalized(self, tmp_path: Path) -> None:
        executor = CommandExecutor(tmp_path)

        result = await executor.execute("definitely-not-a-real-binary-cest run")

        assert result.stdout == ""
        assert result.stderr.startswith("OS error executing command:")
        assert result.exit_code is None

    @pytest.mark.asyncio
    async def test_given_timeout_then_killed_and_flagged(self, tmp_path: Path) -> None:
        # Given
        executor = CommandExecutor(tmp_path, timeout_sec=1.0)

        # When
        result = await executor.execute(
            f"{PY} -c print('Successful:1',flush=True);__import__('time').sleep(10)"
        )

        # Then
        assert result.timed_out is True
        assert result.stdout.strip() == "Successful:1"
        assert result.stderr == "Command timed out after 1.0 seconds"

    @pytest.mark.asyncio
    async def test_given_timeout_then_captured_stderr_kept(self, tmp_path: Path) -> None:
        executor = CommandExecutor(tmp_path, timeout_sec=1.0)

        result = await executor.execute(
            f"{PY} -c __import__('sys').stderr.write('warn\\n');__import__('sys').stderr.flush();"
            "__import__('time').sleep(10)"
        )

        assert result.stderr.splitlines() == ["warn", "Command timed out after 1.0 seconds"]

    @pytest.mark.asyncio
    async def test_given_empty_command_then_stderr_only(self, tmp_path: Path) -> None:
        result = await CommandExecutor(tmp_path).execute("")

        assert result.stderr == "Empty command"
