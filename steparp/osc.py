"""OSC control of engine parameters.

Start the server with ``await OscServer(processor).start()`` inside a
running asyncio loop. It listens on a UDP port (default 9000) and sends
confirmations to a target host/port (default 127.0.0.1:9001).

Receive Handlers
────────────────
- ``/param/<name> <number>``: Set a parameter, using the names in
  ``steparp.parameters.PARAMETER_IDS`` and host units (speed in percent,
  clamp as 0/1)

Send Events
───────────
- ``/param/<name> <number>``: The parameter's value after a change
"""

import asyncio
import logging
import typing

import pythonosc.dispatcher
import pythonosc.osc_server
import pythonosc.udp_client

if typing.TYPE_CHECKING:
	from steparp.processor import Processor


logger = logging.getLogger(__name__)


class OscServer:

	"""Async OSC server/client for parameter control."""

	def __init__ (
		self,
		processor: "Processor",
		receive_port: int = 9000,
		send_port: int = 9001,
		send_host: str = "127.0.0.1"
	) -> None:

		self._processor = processor
		self._receive_port = receive_port
		self._send_port = send_port
		self._send_host = send_host

		self._server: typing.Optional[typing.Any] = None
		self._transport: typing.Optional[asyncio.BaseTransport] = None
		self._client: typing.Optional[pythonosc.udp_client.SimpleUDPClient] = None
		self._dispatcher = pythonosc.dispatcher.Dispatcher()

		self._dispatcher.map("/param/*", self._handle_param)


	async def start (self) -> None:

		"""Start the OSC server and client."""

		self._client = pythonosc.udp_client.SimpleUDPClient(self._send_host, self._send_port)

		self._server = pythonosc.osc_server.AsyncIOOSCUDPServer(
			("0.0.0.0", self._receive_port),
			self._dispatcher,
			asyncio.get_running_loop()  # type: ignore[arg-type]
		)

		transport, _ = await self._server.create_serve_endpoint()
		self._transport = transport

		logger.info(f"OSC listening on :{self._receive_port}, sending to {self._send_host}:{self._send_port}")


	async def stop (self) -> None:

		"""Stop the OSC server."""

		if self._transport:
			self._transport.close()
			self._transport = None
			logger.info("OSC server stopped")


	def send (self, address: str, *args: typing.Any) -> None:

		"""Send an OSC message."""

		if self._client:
			try:
				self._client.send_message(address, args)
			except OSError as e:
				logger.warning(f"OSC send error: {e}")


	def map (self, address: str, handler: typing.Callable) -> None:

		"""Register a custom OSC handler."""

		self._dispatcher.map(address, handler)


	# Handlers

	def _handle_param (self, address: str, *args: typing.Any) -> None:
		# address is like /param/transpose
		if not args:
			return
		parts = address.split("/")
		if len(parts) < 3:
			return
		name = parts[2]
		try:
			value = float(args[0])
		except (ValueError, TypeError):
			logger.warning(f"Invalid OSC value for {name}: {args[0]!r}")
			return

		bridge = self._processor.bridge
		bridge.parameter_changed_by_name(name, value)

		values = bridge.values()
		if name in values:
			self.send(f"/param/{name}", values[name])
