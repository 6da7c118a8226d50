"""SSH transport establishment, direct or through a bastion.

Lifetime ordering:
- Every connection opened for an invocation is registered on an
  AsyncExitStack, so it is closed on every exit path.
- The bastion is pushed first, so it is closed last: the target connection
  rides inside the bastion session and must go away before it.

Bastion relaying:
- The bastion connection is dialed and authenticated like a direct one.
- The target connection is opened with ``tunnel=<bastion connection>``.
  asyncssh then opens a direct-tcpip channel inside the bastion session
  (no new socket) and runs a second, independent handshake with the
  target's own credentials over it.
"""

import asyncio
import logging
import socket
import struct
from collections.abc import AsyncIterator
from contextlib import AsyncExitStack, asynccontextmanager

import asyncssh

from sshprobe.errors import DialError, HandshakeError
from sshprobe.models import Endpoint, ProbeTarget

logger = logging.getLogger(__name__)

BASTION_STAGE = "Bastion"
SERVER_STAGE = "Server"


class LiveConnection:
    """An authenticated SSH connection owned by one probe invocation."""

    def __init__(
        self,
        endpoint: Endpoint,
        stage: str,
        connection: asyncssh.SSHClientConnection,
    ) -> None:
        self.endpoint = endpoint
        self.stage = stage
        self.connection = connection
        self._closing: asyncio.Future[None] | None = None

    @property
    def closed(self) -> bool:
        return self._closing is not None

    async def close(self) -> None:
        """Close the connection and wait until it is fully shut down.

        Safe to call more than once: later callers wait on the same close,
        so nothing proceeds while the first close is still in progress.
        """
        if self._closing is None:
            logger.debug("Closing %s connection to %s", self.stage, self.endpoint.resolved)
            self.connection.close()
            self._closing = asyncio.ensure_future(self.connection.wait_closed())
        await asyncio.shield(self._closing)


class TransportEstablisher:
    """Opens SSH connections for one probe.

    Each probe owns its establisher; the connections of the invocation in
    flight are tracked so that abort() can close them from another task.
    """

    def __init__(self, known_hosts: str | None = None) -> None:
        """Initialize establisher.

        Args:
            known_hosts: Path to known_hosts file, or None to skip host key checks
        """
        self._known_hosts = known_hosts
        self._live: list[LiveConnection] = []

    async def dial(
        self,
        endpoint: Endpoint,
        stage: str,
        timeout: float,
        tunnel: LiveConnection | None = None,
    ) -> LiveConnection:
        """Connect and authenticate to an endpoint.

        Args:
            endpoint: Where to connect
            stage: Label for errors and logs ("Bastion" or "Server")
            timeout: Dial + handshake deadline in seconds
            tunnel: Open bastion connection to relay through

        Returns:
            LiveConnection for the endpoint

        Raises:
            DialError: The socket or tunnel channel could not be opened
            HandshakeError: SSH negotiation or authentication failed
        """
        address = endpoint.resolved or endpoint.resolve(resolve_dns=tunnel is None)
        # Dial by configured name so known_hosts entries keyed by name match;
        # through a bastion the name is resolved on the bastion side
        host = address.host

        options = endpoint.connect_options(timeout, self._known_hosts)
        if tunnel is not None:
            options["tunnel"] = tunnel.connection

        logger.info(
            "Opening %s connection to %s@%s:%d%s",
            stage,
            options["username"],
            address.host,
            address.port,
            f" via {tunnel.endpoint.resolved}" if tunnel is not None else "",
        )

        try:
            conn = await asyncssh.connect(host, port=address.port, **options)
        except asyncssh.ChannelOpenError as e:
            raise DialError(stage, e) from e
        except (asyncssh.Error, asyncssh.KeyImportError) as e:
            raise HandshakeError(stage, e) from e
        except (FileNotFoundError, PermissionError) as e:
            # Unreadable private key file
            raise HandshakeError(stage, e) from e
        except (OSError, asyncio.TimeoutError) as e:
            raise DialError(stage, e) from e

        live = LiveConnection(endpoint, stage, conn)
        if tunnel is not None:
            disable_linger(live, tunnel)
        return live

    @asynccontextmanager
    async def open(
        self, target: ProbeTarget, timeout: float
    ) -> AsyncIterator[LiveConnection]:
        """Open the target connection, through the bastion if one is set.

        Args:
            target: Probe target
            timeout: Dial + handshake deadline applied to each hop

        Yields:
            LiveConnection to the target
        """
        async with AsyncExitStack() as stack:
            stack.callback(self._live.clear)

            tunnel = None
            if target.bastion is not None and target.uses_bastion:
                tunnel = await self.dial(target.bastion, BASTION_STAGE, timeout)
                self._live.append(tunnel)
                stack.push_async_callback(tunnel.close)

            conn = await self.dial(target.endpoint, SERVER_STAGE, timeout, tunnel=tunnel)
            self._live.append(conn)
            stack.push_async_callback(conn.close)

            yield conn

    async def abort(self) -> None:
        """Close the in-flight invocation's connections, target first.

        Any call blocked on an established connection fails instead of
        hanging. A dial still in progress is not tracked yet and is bounded
        only by the connect timeout.
        """
        for live in reversed(list(self._live)):
            logger.warning("Aborting %s connection to %s", live.stage, live.endpoint.resolved)
            await live.close()


def disable_linger(live: LiveConnection, tunnel: LiveConnection | None = None) -> None:
    """Set SO_LINGER to (on, 0) if the connection sits on its own TCP socket.

    A tunneled connection reports the bastion's socket as its own; that
    socket is left alone so the bastion still closes cleanly.

    Args:
        live: Connection to adjust
        tunnel: Bastion connection ``live`` was opened through
    """
    sock = live.connection.get_extra_info("socket")
    if sock is None or getattr(sock, "type", None) != socket.SOCK_STREAM:
        return
    if tunnel is not None and sock is tunnel.connection.get_extra_info("socket"):
        return
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_LINGER, struct.pack("ii", 1, 0))
    except OSError as e:
        logger.debug("Cannot disable linger for %s: %s", live.endpoint.resolved, e)
