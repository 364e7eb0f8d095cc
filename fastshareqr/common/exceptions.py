
class FastShareError(Exception):
	pass

class PathRejected(FastShareError):
	"""The requested path cannot be served. Always answered with 404."""
	def __init__(self, path, reason):
		self.path = path
		self.reason = reason
		super().__init__('%s: %s' % (reason, path))

class ShareIOError(FastShareError):
	"""Reading a resolved path failed. Fails the single request with 500."""
	def __init__(self, path, innerexception):
		self.path = path
		self.innerexception = innerexception
		super().__init__('Failed to read %s: %s' % (path, innerexception))

class StartupError(FastShareError):
	pass
