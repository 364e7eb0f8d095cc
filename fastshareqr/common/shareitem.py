import os
import enum


class ShareKind(enum.Enum):
	TEXT = 'text'
	FILE = 'file'
	DIRECTORY = 'directory'


class ShareItem:
	"""
	The one thing shared per run: a literal text, a single file or a directory tree.
	Use the text/file/directory constructors, the value is read-only afterwards.
	"""
	def __init__(self, kind:ShareKind, value:str):
		if not isinstance(kind, ShareKind):
			raise ValueError('Unknown share kind %r' % kind)
		if value is None:
			raise ValueError('Share value can\'t be None!')
		self.__kind = kind
		self.__value = value

	@staticmethod
	def text(text:str):
		return ShareItem(ShareKind.TEXT, text)

	@staticmethod
	def file(path:str):
		return ShareItem(ShareKind.FILE, path)

	@staticmethod
	def directory(path:str):
		return ShareItem(ShareKind.DIRECTORY, path)

	@property
	def kind(self) -> ShareKind:
		return self.__kind

	@property
	def value(self) -> str:
		return self.__value

	def __repr__(self):
		return 'ShareItem(%s, %r)' % (self.__kind.name, self.__value)


class ServerConfig:
	"""
	Where the share server listens and what it exposes.
	root is made absolute once here and never changes. Port 0 lets the OS pick.
	"""
	def __init__(self, root:str, hostname:str, port:int, bind_address:str = '0.0.0.0'):
		if not hostname:
			raise ValueError('Hostname must be provided!')
		if not isinstance(port, int) or port < 0 or port > 65535:
			raise ValueError('Port must be between 0 and 65535, got %r' % (port,))
		self.__root = os.path.abspath(root)
		self.__hostname = hostname
		self.__port = port
		self.__bind_address = bind_address

	@property
	def root(self) -> str:
		return self.__root

	@property
	def hostname(self) -> str:
		return self.__hostname

	@property
	def port(self) -> int:
		return self.__port

	@property
	def bind_address(self) -> str:
		return self.__bind_address

	def __repr__(self):
		return 'ServerConfig(root=%r, hostname=%r, port=%s)' % (self.__root, self.__hostname, self.__port)
