import asyncio
from fastshareqr.unicomm import logger
from fastshareqr.unicomm.common.packetizers import Packetizer


class UniConnection:
	def __init__(self, reader:asyncio.StreamReader, writer:asyncio.StreamWriter, packetizer:Packetizer):
		self.reader = reader
		self.writer = writer
		self.packetizer = packetizer
		self.closing = False

	def get_extra_info(self, name, default=None):
		if hasattr(self.writer, 'get_extra_info'):
			return self.writer.get_extra_info(name, default)
		return default

	def get_peer_str(self):
		peer = self.get_extra_info('peername')
		if peer is None:
			return 'unknown'
		return '%s:%s' % (peer[0], peer[1])

	async def close(self):
		if self.closing is True:
			return
		self.closing = True
		if self.writer is not None:
			self.writer.close()
			try:
				await self.writer.wait_closed()
			except (ConnectionError, OSError) as e:
				logger.debug('Error while closing connection: %s' % e)

	async def write(self, data):
		async for packet in self.packetizer.data_out(data):
			self.writer.write(packet)
			await self.writer.drain()

	async def read_one(self):
		async for packet in self.read():
			return packet
		return b''

	async def read(self):
		try:
			while self.closing is False:
				data = await self.reader.read(self.packetizer.buffer_size)
				if data == b'':
					break
				async for result in self.packetizer.data_in(data):
					if result is None:
						break
					yield result
		except (ConnectionError, OSError) as e:
			logger.debug('Connection read failed: %s' % e)
