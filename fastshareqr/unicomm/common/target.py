import enum
import ipaddress


class UniProto(enum.Enum):
	SERVER_TCP = 6


class UniTarget:
	def __init__(self, ip:str, port:int, protocol:UniProto):
		self.hostname = None
		self.port = port
		self.protocol = protocol

		try:
			ipaddress.ip_address(ip)
			self.ip = ip
		except ValueError:
			if ip is not None:
				self.hostname = ip
			self.ip = None

		if ip is None:
			raise Exception('Listen address can\'t be none!')

	def get_ip_or_hostname(self):
		if self.ip is not None:
			return self.ip
		return self.hostname
