import asyncio
import copy

from fastshareqr.unicomm.common.target import UniTarget, UniProto
from fastshareqr.unicomm.common.packetizers import Packetizer
from fastshareqr.unicomm.common.connection import UniConnection
from fastshareqr.unicomm import logger


class UniServer:
	def __init__(self, target:UniTarget, packetizer:Packetizer):
		self.target = target
		self.packetizer = packetizer
		self.connection_queue = asyncio.Queue()
		self.listening_evt = asyncio.Event()
		self.bound_port = None

	async def __handle_connection(self, reader, writer):
		packetizer = copy.deepcopy(self.packetizer)
		connection = UniConnection(reader, writer, packetizer)
		await self.connection_queue.put(connection)

	async def serve(self):
		"""
		Binds the listening socket and yields a UniConnection for every accepted client.
		Bind errors are raised to the caller before anything is yielded.
		"""
		server = None
		try:
			if self.target.protocol != UniProto.SERVER_TCP:
				raise Exception('Unknown protocol "%s"' % self.target.protocol)

			server = await asyncio.start_server(self.__handle_connection, self.target.get_ip_or_hostname(), self.target.port)
			self.bound_port = server.sockets[0].getsockname()[1]
			logger.debug('Listening on %s:%s' % (self.target.get_ip_or_hostname(), self.bound_port))
			self.listening_evt.set()
			while server.is_serving():
				connection = await self.connection_queue.get()
				yield connection
		finally:
			if server is not None:
				server.close()
				# accepted but never handed out, wait_closed waits on these too
				while not self.connection_queue.empty():
					await self.connection_queue.get_nowait().close()
				await server.wait_closed()
