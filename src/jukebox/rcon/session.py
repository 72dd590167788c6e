"""Authenticated remote console session with the game."""

import asyncio
import errno
import logging
from typing import Awaitable, Callable

from rcon.exceptions import EmptyResponse, SessionTimeout, WrongPassword
from rcon.source import Client

from jukebox.background import BackgroundTasks
from jukebox.config import constants
from jukebox.config.settings import JukeboxSettings
from jukebox.errors import AuthError, CommandExecError, ConnectionRefused
from jukebox.rcon.models import SessionState

logger = logging.getLogger(__name__)


def _error_code(error: OSError) -> str:
    if error.errno is not None:
        return errno.errorcode.get(error.errno, str(error.errno))
    return type(error).__name__


class RconSession:
    """Owns a single authenticated connection to the game's remote console.

    The blocking RCON client runs in a worker thread. Only one command is on
    the wire at a time.
    """

    def __init__(
        self,
        settings: JukeboxSettings,
        client_factory: Callable[[], Client] | None = None,
    ):
        self.settings = settings
        self._client_factory = client_factory or self._create_client
        self._client: Client | None = None
        self._lock = asyncio.Lock()
        self._background = BackgroundTasks()
        self.state = SessionState.DISCONNECTED

        # Set once, on the first successful authentication
        self.authenticated = asyncio.Event()
        # Set while a (re)connect is needed
        self._disconnected = asyncio.Event()
        self._disconnected.set()

        # Runs after every successful authentication
        self.on_connected: Callable[[], Awaitable[object]] | None = None

    @property
    def is_connected(self) -> bool:
        return self.state == SessionState.CONNECTED

    def _create_client(self) -> Client:
        return Client(
            self.settings.rcon_host,
            self.settings.rcon_port,
            timeout=constants.RCON_TIMEOUT_SECS,
            passwd=self.settings.rcon_password,
        )

    async def authenticate(self) -> None:
        """Open a new connection and log in.

        Raises:
            ConnectionRefused: Nothing is listening on the RCON port.
            AuthError: The login failed for any other reason.
        """
        async with self._lock:
            self._close_client()
            self.state = SessionState.AUTHENTICATING
            client = self._client_factory()

            try:
                await asyncio.to_thread(client.connect, True)
            except ConnectionRefusedError as e:
                self._login_failed(client)
                raise ConnectionRefused() from e
            except WrongPassword as e:
                self._login_failed(client)
                raise AuthError(
                    "WRONG_PASSWORD", "RCON password was rejected by the game"
                ) from e
            except OSError as e:
                self._login_failed(client)
                raise AuthError(_error_code(e)) from e
            except Exception as e:
                # Dropped or malformed handshake (EmptyResponse, SessionTimeout,
                # bad packet data)
                self._login_failed(client)
                raise AuthError(type(e).__name__) from e

            self._client = client
            self.state = SessionState.CONNECTED
            self._disconnected.clear()

    async def execute(self, command: str) -> str:
        """Run a single console command.

        A transport failure drops the connection so the connection loop
        re-authenticates; the command itself is not retried.

        Args:
            command: Console command line to run.

        Returns:
            The game's response text.

        Raises:
            CommandExecError: The session is not connected or the command failed.
        """
        async with self._lock:
            client = self._client
            if client is None or self.state != SessionState.CONNECTED:
                raise CommandExecError(command, "not connected")

            try:
                return await asyncio.to_thread(client.run, command)
            except (OSError, SessionTimeout, EmptyResponse) as e:
                logger.warning(f"Lost RCON connection while running {command!r}")
                self._close_client()
                self.state = SessionState.DISCONNECTED
                self._disconnected.set()
                raise CommandExecError(command, str(e) or type(e).__name__) from e

    async def maintain_connection(self) -> None:
        """Authenticate, retrying forever, and reconnect whenever the connection drops."""
        retry_secs = self.settings.connect_retry_interval_secs

        while True:
            await self._disconnected.wait()

            try:
                await self.authenticate()
            except ConnectionRefused:
                logger.info(
                    f"Failed to connect to RCON, retrying in {retry_secs:g} seconds..."
                )
            except AuthError as e:
                logger.warning(
                    f"RCON authentication failed ({e.code}), retrying in {retry_secs:g} seconds..."
                )
            else:
                if self.authenticated.is_set():
                    logger.info("Reconnected to RCON")
                else:
                    logger.info("Successfully connected to RCON")
                    self.authenticated.set()

                if self.on_connected is not None:
                    self._background.spawn(self.on_connected(), name="on_connected")
                continue

            await asyncio.sleep(retry_secs)

    async def keep_alive(self) -> None:
        """Keep the voice channel open by re-issuing +voicerecord forever.

        Runs regardless of connection state. Failures are expected while
        disconnected and only logged at debug level.
        """
        while True:
            await asyncio.sleep(self.settings.keep_alive_interval_secs)
            try:
                await self.execute(constants.VOICE_RECORD_START)
            except CommandExecError as e:
                logger.debug(f"Keep-alive skipped: {e}")

    async def close(self) -> None:
        """Drop the connection and stop background work."""
        await self._background.cancel_all()
        async with self._lock:
            self._close_client()
            self.state = SessionState.DISCONNECTED

    def _login_failed(self, client: Client) -> None:
        self._abandon(client)
        self.state = SessionState.DISCONNECTED

    def _close_client(self) -> None:
        if self._client is None:
            return
        self._abandon(self._client)
        self._client = None

    @staticmethod
    def _abandon(client: Client) -> None:
        try:
            client.close()
        except OSError as e:
            logger.debug(f"Error closing RCON socket: {e}")
