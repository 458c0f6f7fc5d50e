"""Health probes for MCP servers declaring a URL.

Each server entry with a ``url`` gets one ``HEAD`` request.  Probes run
one after another in declaration order; the blocking :mod:`requests`
call is moved off the event loop with :func:`asyncio.to_thread`.

The client timeout only bounds each connect and each socket read, so a
server trickling its response could hold a probe far longer.  Every
probe therefore also carries a wall-clock deadline of the same length.
When it expires the probe reports ``timeout`` and a
:class:`ProbeSession` shuts down its open sockets, which makes the
worker thread return.

Network reachability at setup time depends on the environment (OAuth
not yet completed, cold starts), so no probe outcome is ever worse than
``warn``.
"""

from __future__ import annotations

import asyncio
import logging
import socket
import threading
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

import click
import requests
from requests.adapters import HTTPAdapter
from urllib3.connectionpool import HTTPConnectionPool, HTTPSConnectionPool

from . import config
from .checks import server_map
from .context import ProjectContext
from .harness import CheckRunner
from .models import CheckReturn

logger = logging.getLogger(__name__)

# Statuses returned by endpoints that are reachable but gated behind an
# authorisation flow.
AUTH_CHALLENGE_STATUSES = (401, 403)


class _TrackingAdapter(HTTPAdapter):
    """HTTP adapter that remembers every connection its pools open."""

    def __init__(self, **kwargs: Any) -> None:
        self._lock = threading.Lock()
        self._connections: List[Any] = []
        super().__init__(**kwargs)

    def init_poolmanager(self, *args: Any, **kwargs: Any) -> None:
        super().init_poolmanager(*args, **kwargs)
        self.poolmanager.pool_classes_by_scheme = {
            "http": self._tracking_pool(HTTPConnectionPool),
            "https": self._tracking_pool(HTTPSConnectionPool),
        }

    def _tracking_pool(self, base: type) -> type:
        adapter = self

        class TrackingPool(base):  # type: ignore[misc, valid-type]
            def _new_conn(self):  # type: ignore[no-untyped-def]
                conn = super()._new_conn()
                adapter._track(conn)
                return conn

        return TrackingPool

    def _track(self, conn: Any) -> None:
        with self._lock:
            self._connections.append(conn)

    def abort(self) -> None:
        """Shut down the socket of every connection opened so far."""
        with self._lock:
            connections, self._connections = self._connections, []
        for conn in connections:
            sock = getattr(conn, "sock", None)
            if sock is None:
                continue
            # shutdown() wakes a thread blocked in recv(); close() alone does not
            try:
                sock.shutdown(socket.SHUT_RDWR)
            except OSError:
                pass


class ProbeSession(requests.Session):
    """Session whose in-flight requests can be aborted from another thread."""

    def __init__(self) -> None:
        super().__init__()
        self._adapters_by_prefix = {prefix: _TrackingAdapter() for prefix in ("https://", "http://")}
        for prefix, adapter in self._adapters_by_prefix.items():
            self.mount(prefix, adapter)

    def abort(self) -> None:
        for adapter in self._adapters_by_prefix.values():
            adapter.abort()


@dataclass(frozen=True)
class ProbeResult:
    """Outcome of a single probe.

    ``status`` is the HTTP status code, or ``"timeout"`` /
    ``"unreachable"`` when no response arrived.  ``ok`` is true for
    successful responses and any status below 500 except the
    authorisation challenges.
    """

    ok: bool
    status: Union[int, str]


def _probe_blocking(session: requests.Session, url: str, timeout: float) -> ProbeResult:
    try:
        response = session.head(url, timeout=timeout)
    except requests.Timeout:
        return ProbeResult(ok=False, status="timeout")
    except requests.RequestException as exc:
        logger.debug("probe of %s failed: %s", url, exc)
        return ProbeResult(ok=False, status="unreachable")
    response.close()
    status = response.status_code
    ok = status not in AUTH_CHALLENGE_STATUSES and (response.ok or status < 500)
    return ProbeResult(ok=ok, status=status)


async def probe_server(
    url: str,
    *,
    session: requests.Session,
    timeout: float = config.PROBE_TIMEOUT_SECONDS,
) -> ProbeResult:
    """Issue one HEAD request to ``url`` within ``timeout`` seconds overall."""
    logger.debug("probing %s (timeout %.1fs)", url, timeout)
    try:
        return await asyncio.wait_for(asyncio.to_thread(_probe_blocking, session, url, timeout), timeout)
    except asyncio.TimeoutError:
        logger.debug("probe of %s exceeded %.1fs, aborting", url, timeout)
        if isinstance(session, ProbeSession):
            session.abort()
        else:
            session.close()
        return ProbeResult(ok=False, status="timeout")


def classify_probe(url: str, result: ProbeResult) -> CheckReturn:
    """Map a probe result onto a check outcome; never ``fail``."""
    if result.status in AUTH_CHALLENGE_STATUSES:
        return CheckReturn(status="warn", message=f"{url} → {result.status} (needs OAuth via /mcp)")
    if result.ok:
        return CheckReturn(status="pass", message=f"{url} → {result.status}")
    return CheckReturn(status="warn", message=f"{url} → {result.status}")


def load_mcp_servers(ctx: ProjectContext) -> Optional[Dict[str, Dict[str, Any]]]:
    """Return the declared MCP servers, or None when there is nothing to probe.

    A missing file, a missing server map and an unparsable file all
    yield None.  The configuration checks already report those cases.
    """
    if not ctx.exists(config.MCP_CONFIG_FILE):
        return None
    try:
        raw = ctx.read_json(config.MCP_CONFIG_FILE)
    except (OSError, ValueError) as exc:
        logger.debug("skipping MCP probes, cannot read %s: %s", config.MCP_CONFIG_FILE, exc)
        return None
    if not isinstance(raw, dict):
        return None
    servers = server_map(raw)
    if not isinstance(servers, dict):
        return None
    return servers


async def run_mcp_health_checks(
    runner: CheckRunner,
    ctx: ProjectContext,
    *,
    session: requests.Session,
    timeout: float = config.PROBE_TIMEOUT_SECONDS,
    echo=click.echo,
) -> None:
    """Register one probe check per server URL, sequentially."""
    servers = load_mcp_servers(ctx)
    if servers is None:
        return

    echo("\n📡 Checking MCP server connectivity...\n")

    for name, server in servers.items():
        url = server.get("url") if isinstance(server, dict) else None
        if not url:
            continue

        async def _probe(url: str = url) -> CheckReturn:
            result = await probe_server(url, session=session, timeout=timeout)
            return classify_probe(url, result)

        await runner.check_async(f"MCP: {name}", _probe)


__all__ = [
    "ProbeSession",
    "ProbeResult",
    "probe_server",
    "classify_probe",
    "load_mcp_servers",
    "run_mcp_health_checks",
]
