"""Serverless Framework collaborators: function definitions and local invocation."""

import asyncio
import json
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import yaml

from offline_schedule.core.config import expand_env_vars_recursive
from offline_schedule.core.errors import InvocationError

logger = logging.getLogger(__name__)

DEFAULT_INVOKE_COMMAND: tuple[str, ...] = ("sls", "invoke", "local")


class _ServiceLoader(yaml.SafeLoader):
    """SafeLoader that tolerates CloudFormation short-form tags (!Ref, !GetAtt, ...)."""


def _construct_tagged(loader: yaml.SafeLoader, tag_suffix: str, node: yaml.Node) -> Any:
    if isinstance(node, yaml.MappingNode):
        return loader.construct_mapping(node, deep=True)
    if isinstance(node, yaml.SequenceNode):
        return loader.construct_sequence(node, deep=True)
    return loader.construct_scalar(node)


_ServiceLoader.add_multi_constructor("!", _construct_tagged)


class ServerlessFunctionProvider:
    """Reads function definitions from a serverless service file.

    The file is re-read on every call so edits are picked up the next time
    events are scheduled.
    """

    def __init__(self, service_path: Path | str):
        """Initialize the provider.

        Args:
            service_path: Path to serverless.yml (or .yaml).
        """
        self.service_path = Path(service_path)

    def __call__(self) -> dict[str, Any]:
        """Return the service's ``functions`` mapping.

        Raises:
            FileNotFoundError: If the service file doesn't exist.
            yaml.YAMLError: If the service file is malformed.
            ValueError: If ``functions`` is not a mapping.
        """
        if not self.service_path.exists():
            raise FileNotFoundError(f"Serverless service file not found: {self.service_path}")

        with self.service_path.open() as f:
            service: dict[str, Any] = yaml.load(f, Loader=_ServiceLoader) or {}

        functions = expand_env_vars_recursive(service.get("functions") or {})
        if not isinstance(functions, dict):
            raise ValueError(f"'functions' in {self.service_path} must be a mapping")

        logger.debug(f"Loaded {len(functions)} function(s) from {self.service_path}")
        return functions


class ServerlessInvoker:
    """Invokes a function locally through the serverless CLI.

    Runs ``<command> --function <name> --data <json>`` as a subprocess whose
    output goes straight to this process's stdout/stderr.
    """

    def __init__(
        self,
        command: Sequence[str] = DEFAULT_INVOKE_COMMAND,
        cwd: Path | str | None = None,
        timeout_seconds: float | None = None,
    ):
        """Initialize the invoker.

        Args:
            command: Command prefix, e.g. ("sls", "invoke", "local").
            cwd: Working directory for the subprocess (None = current directory).
            timeout_seconds: Kill the invocation after this many seconds (None = no limit).
        """
        self.command = list(command)
        self.cwd = Path(cwd) if cwd is not None else None
        self.timeout_seconds = timeout_seconds

    def build_args(self, function_name: str, input: Any) -> list[str]:
        """Full argument vector for invoking ``function_name`` with ``input``."""
        return [*self.command, "--function", function_name, "--data", json.dumps(input)]

    async def __call__(self, function_name: str, input: Any) -> None:
        """Run the invocation and wait for it to finish.

        Raises:
            InvocationError: If the command is missing, times out, or exits non-zero.
        """
        args = self.build_args(function_name, input)
        logger.debug(f"Running: {' '.join(args)}")

        try:
            process = await asyncio.create_subprocess_exec(*args, cwd=self.cwd)
        except FileNotFoundError as e:
            raise InvocationError(function_name, f"Invocation command not found: {self.command[0]}") from e

        try:
            async with asyncio.timeout(self.timeout_seconds):
                returncode = await process.wait()
        except TimeoutError as e:
            process.kill()
            await process.wait()
            raise InvocationError(
                function_name,
                f"Invocation of {function_name} timed out after {self.timeout_seconds}s",
            ) from e

        if returncode != 0:
            raise InvocationError(
                function_name,
                f"Invocation of {function_name} exited with code {returncode}",
                returncode=returncode,
            )
