import os

from fastshareqr import logger
from fastshareqr.common.exceptions import StartupError
from fastshareqr.common.shareitem import ShareItem, ShareKind, ServerConfig
from fastshareqr.share.router import DirectoryRouter, FileRouter, split_target
from fastshareqr.share.response import ShareResponse
from fastshareqr.unicomm.common.target import UniTarget, UniProto
from fastshareqr.unicomm.protocol.server.http.httpserver import HTTPServer, HTTPServerHandler


class ShareRequestHandler(HTTPServerHandler):
    """
    Hands GET requests to the router and writes back what it returns.
    Any other method gets the same empty 404 as an unresolvable path.
    """
    def __init__(self, router):
        super().__init__()
        self.router = router

    async def do_GET(self, request):
        tail = split_target(request.target.decode('latin-1'))
        try:
            response = self.router.route(tail)
        except Exception:
            logger.exception('Unexpected error while routing %r' % tail)
            response = ShareResponse.server_error()
        logger.debug('GET /%s -> %s' % (tail, response.status_code))
        await self.send_share_response(response)

    async def do_unsupported(self, request):
        logger.debug('%s %s -> 404' % (request.method.decode('latin-1'), request.target.decode('latin-1')))
        await self.send_share_response(ShareResponse.not_found())

    async def send_share_response(self, response:ShareResponse):
        await self.send_body(response.status_code, response.headers, response.body)


def create_router(item:ShareItem, config:ServerConfig):
    if item.kind == ShareKind.FILE:
        if not os.path.isfile(config.root):
            raise StartupError('File does not exist: %s' % config.root)
        return FileRouter(config.root)
    elif item.kind == ShareKind.DIRECTORY:
        if not os.path.isdir(config.root):
            raise StartupError('Directory does not exist: %s' % config.root)
        return DirectoryRouter(config.root)
    elif item.kind == ShareKind.TEXT:
        raise ValueError('Text is shared directly, it needs no server')
    raise ValueError('Unknown share kind %s' % item.kind)


def format_share_url(hostname:str, port:int) -> str:
    if ':' in hostname and not hostname.startswith('['):
        hostname = '[%s]' % hostname
    return 'http://%s:%s/' % (hostname, port)


class ShareServer:
    def __init__(self, item:ShareItem, config:ServerConfig):
        self.item = item
        self.config = config
        self.router = create_router(item, config)
        target = UniTarget(config.bind_address, config.port, UniProto.SERVER_TCP)
        self.http_server = HTTPServer(lambda: ShareRequestHandler(self.router), target)

    @property
    def port(self) -> int:
        if self.http_server.port is not None:
            return self.http_server.port
        return self.config.port

    @property
    def url(self) -> str:
        return format_share_url(self.config.hostname, self.port)

    async def __aenter__(self):
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.terminate()

    async def start(self) -> str:
        """Binds the listener and returns the share URL."""
        try:
            await self.http_server.start()
        except OSError as e:
            raise StartupError('Failed to listen on %s:%s: %s' % (self.config.bind_address, self.config.port, e))
        logger.info('Sharing %s at %s' % (self.config.root, self.url))
        return self.url

    async def serve_forever(self):
        await self.http_server.wait_closed()

    async def terminate(self):
        await self.http_server.terminate()


async def create_server(item:ShareItem, config:ServerConfig) -> ShareServer:
    """Starts a share server for a file or directory item, returns it once listening."""
    server = ShareServer(item, config)
    await server.start()
    return server


async def get_share_link(item:ShareItem, config:ServerConfig = None):
    """
    Returns the string to encode in the QR code and the running server, if any.
    Text is passed through unchanged, files and directories get a server.
    """
    if item.kind == ShareKind.TEXT:
        return item.value, None
    if config is None:
        raise ValueError('A ServerConfig is needed to share %s' % item.kind.value)
    server = await create_server(item, config)
    return server.url, server
