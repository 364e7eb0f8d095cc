import socket

from fastshareqr.common.exceptions import StartupError


def pick_unused_port(bind_address:str = '0.0.0.0') -> int:
	"""Asks the OS for a free TCP port by binding port 0."""
	try:
		with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
			s.bind((bind_address, 0))
			return s.getsockname()[1]
	except OSError as e:
		raise StartupError('No free port available: %s' % e)


def get_local_ip(route_address:str = '10.255.255.255') -> str:
	"""
	Address other devices on the LAN can reach us on.
	Connecting a UDP socket sends nothing, it only makes the OS pick the outgoing interface.
	"""
	s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
	try:
		s.connect((route_address, 1))
		ip = s.getsockname()[0]
	except OSError as e:
		raise StartupError('Can\'t discover the local IP address, pass -H: %s' % e)
	finally:
		s.close()
	if not ip or ip == '0.0.0.0':
		raise StartupError('Can\'t discover the local IP address, pass -H')
	return ip
