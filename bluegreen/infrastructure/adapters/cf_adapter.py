"""
Cloud Foundry Adapter

Architectural Intent:
- Infrastructure adapter implementing PlatformPort via the cf CLI
- Runs cf locally through invoke, or on a jump host through a Fabric
  Connection when remote_host is configured
- Blocking CLI calls are pushed to the default executor
- Runner and SSH transport failures surface as PlatformCommandError
- The targeted space is resolved once per adapter and reused by every probe

Security:
- Every argument is quoted with shlex.quote() before reaching a shell
- SSH connections use connect_timeout, allow_agent, look_for_keys
"""

import asyncio
import json
import logging
import re
import shlex
from typing import Any, Optional
from urllib.parse import quote

from fabric import Connection
from invoke import Context
from invoke.exceptions import CommandTimedOut, Failure, ThreadException
from paramiko.ssh_exception import SSHException

from bluegreen.domain.errors import PlatformCommandError, PlatformError, ProbeError
from bluegreen.domain.ports.platform_port import PlatformPort

logger = logging.getLogger(__name__)

_TARGET_SPACE_RE = re.compile(r"^space:\s*(\S.*?)\s*$", re.MULTILINE)


class CloudFoundryAdapter(PlatformPort):
    """Adapter implementing PlatformPort with the cf CLI."""

    def __init__(
        self,
        binary: str = "cf",
        cf_home: str = "",
        remote_host: str = "",
        remote_user: str = "",
        remote_port: int = 22,
        timeout: int = 0,
    ):
        self.binary = binary
        self.cf_home = cf_home
        self.remote_host = remote_host
        self.remote_user = remote_user
        self.remote_port = remote_port
        self.timeout = timeout or None
        self._space_guid: Optional[str] = None

    def _get_runner(self) -> Context:
        if not self.remote_host:
            return Context()
        return Connection(
            host=self.remote_host,
            user=self.remote_user or None,
            port=self.remote_port,
            connect_timeout=30,
            connect_kwargs={
                "allow_agent": True,
                "look_for_keys": True,
            },
        )

    def _run(self, args: list[str], show_output: bool = False) -> str:
        command = " ".join(shlex.quote(a) for a in [self.binary, *args])
        env = {"CF_HOME": self.cf_home} if self.cf_home else {}
        logger.debug("Running: %s", command)
        try:
            result = self._get_runner().run(
                command,
                hide=not show_output,
                warn=True,
                env=env,
                timeout=self.timeout,
            )
        except CommandTimedOut as e:
            raise PlatformCommandError(
                " ".join(args), None, f"timed out after {e.timeout}s"
            ) from e
        except (Failure, ThreadException, SSHException, OSError) as e:
            where = self.remote_host or "localhost"
            raise PlatformCommandError(
                " ".join(args), None, f"could not run on {where}: {e}"
            ) from e

        if result.failed:
            output = (result.stderr or result.stdout or "").strip()
            raise PlatformCommandError(" ".join(args), result.exited, output)
        return result.stdout

    async def _cf(self, *args: str, show_output: bool = False) -> str:
        return await asyncio.get_event_loop().run_in_executor(
            None, lambda: self._run(list(args), show_output)
        )

    async def _curl_json(self, path: str) -> dict[str, Any]:
        output = await self._cf("curl", path)
        try:
            data = json.loads(output)
        except json.JSONDecodeError as e:
            raise ProbeError(f"Invalid JSON from 'cf curl {path}': {e}") from e
        if not isinstance(data, dict):
            raise ProbeError(f"Unexpected response from 'cf curl {path}': {data!r}")
        return data

    async def current_space_guid(self) -> str:
        """Resolve the targeted space once; later probes reuse it."""
        if self._space_guid is not None:
            return self._space_guid
        target = await self._cf("target")
        match = _TARGET_SPACE_RE.search(target)
        if not match:
            raise ProbeError("No space targeted. Use 'cf target -s SPACE' first.")
        guid = await self._cf("space", match.group(1), "--guid")
        self._space_guid = guid.strip()
        return self._space_guid

    async def exists(self, name: str) -> bool:
        space_guid = await self.current_space_guid()
        path = f"/v2/apps?q=name:{quote(name)}&q=space_guid:{space_guid}"
        data = await self._curl_json(path)

        if "total_results" not in data:
            raise ProbeError("Missing total_results from api response")
        total = data["total_results"]
        if isinstance(total, bool) or not isinstance(total, (int, float)):
            raise ProbeError(f"total_results didn't have a number {total!r}")
        return total == 1

    async def push(
        self, name: str, manifest_path: str, app_path: Optional[str] = None
    ) -> None:
        args = ["push", name, "-f", manifest_path]
        if app_path:
            args += ["-p", app_path]
        await self._cf(*args, show_output=True)

    async def rename(self, old_name: str, new_name: str) -> None:
        await self._cf("rename", old_name, new_name)

    async def stop(self, name: str) -> None:
        await self._cf("stop", name)

    async def delete(self, name: str) -> None:
        await self._cf("delete", name, "-f")

    async def first_route_domain(self, app_name: str) -> str:
        guid = (await self._cf("app", app_name, "--guid")).strip()
        try:
            data = await self._curl_json(
                f"/v2/apps/{guid}/routes?inline-relations-depth=1"
            )
            return data["resources"][0]["entity"]["domain"]["entity"]["name"]
        except ProbeError as e:
            raise PlatformError(str(e)) from e
        except (KeyError, IndexError, TypeError) as e:
            raise PlatformError(f"{app_name} has no bound routes") from e

    async def unmap_route(self, source_app_name: str, target_host_name: str) -> None:
        domain = await self.first_route_domain(source_app_name)
        await self._cf("unmap-route", source_app_name, domain, "-n", target_host_name)

    async def list_applications(self) -> None:
        await self._cf("apps", show_output=True)
