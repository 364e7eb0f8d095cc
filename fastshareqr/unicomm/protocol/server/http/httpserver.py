from fastshareqr.unicomm.common.target import UniTarget
from fastshareqr.unicomm.common.connection import UniConnection
from fastshareqr.unicomm.common.packetizers import Packetizer
from fastshareqr.unicomm.server import UniServer
from fastshareqr.unicomm import logger
from fastshareqr._version import __version__
import asyncio
import datetime
import email.utils
import h11


SERVER_IDENT = " ".join(
    [f"fastshareqr/{__version__}", h11.PRODUCT_ID]
).encode("ascii")


def format_date_time(dt=None):
    """Generate a RFC 7231 / RFC 9110 IMF-fixdate string"""
    if dt is None:
        dt = datetime.datetime.now(datetime.timezone.utc)
    return email.utils.format_datetime(dt, usegmt=True)


class HTTPConnectionWrapper:
    def __init__(self, client_id, stream:UniConnection):
        self.client_id = client_id
        self.stream = stream
        self.conn = h11.Connection(h11.SERVER)

    def debug(self, *args):
        msg = ' '.join(str(x) for x in args)
        logger.debug('[%s] %s' % (self.client_id, msg))

    async def send(self, event):
        # ConnectionClosed is never sent from here, closing goes through
        # shutdown_and_clean_up
        assert type(event) is not h11.ConnectionClosed
        data = self.conn.send(event)
        try:
            await self.stream.write(data)
        except BaseException:
            self.conn.send_failed()
            raise

    async def _read_from_peer(self):
        if self.conn.they_are_waiting_for_100_continue:
            self.debug("Sending 100 Continue")
            go_ahead = h11.InformationalResponse(
                status_code=100, headers=basic_headers()
            )
            await self.send(go_ahead)
        data = await self.stream.read_one()
        self.debug('Read %s bytes from peer' % len(data or b''))
        self.conn.receive_data(data or b'')

    async def next_event(self):
        while True:
            event = self.conn.next_event()
            self.debug('Event: %s' % event)
            if event is h11.NEED_DATA:
                await self._read_from_peer()
                continue
            return event

    async def shutdown_and_clean_up(self):
        await self.stream.close()


def basic_headers():
    # HTTP requires these headers in all responses
    return [
        ("Date", format_date_time().encode("ascii")),
        ("Server", SERVER_IDENT),
    ]


class HTTPServerHandler:
    """
    Per-connection request handler. Subclasses implement do_<METHOD>
    coroutines, each receiving the h11.Request event.
    """
    def __init__(self):
        self._wrapper:HTTPConnectionWrapper = None

    def basic_headers(self):
        return basic_headers()

    async def _process_request(self, wrapper:HTTPConnectionWrapper, request:h11.Request):
        self._wrapper = wrapper
        method = request.method.decode("ascii")
        func = getattr(self, f"do_{method}", None)
        if func is None:
            return await self.do_unsupported(request)
        await func(request)

    async def do_unsupported(self, request):
        await self.send_body(405, [], b"")

    async def send_body(self, status_code:int, headers, body:bytes):
        """Sends a complete response with a fixed Content-Length."""
        all_headers = self.basic_headers()
        all_headers.extend(headers)
        all_headers.append(("Content-Length", str(len(body)).encode("ascii")))
        await self._wrapper.send(h11.Response(status_code=status_code, headers=all_headers))
        if body:
            await self._wrapper.send(h11.Data(data=body))
        await self._wrapper.send(h11.EndOfMessage())


class HTTPServer:
    def __init__(self, client_handler, target:UniTarget):
        self.target = target
        self.client_handler = client_handler

        self.clients = set()
        self.id_counter = 0
        self.server = UniServer(self.target, Packetizer())
        self.started_evt = self.server.listening_evt
        self.__main_task = None

    @property
    def port(self):
        """The port actually bound, available once started."""
        return self.server.bound_port

    async def start(self):
        """
        Starts serving in the background and returns once the listener is bound.
        Bind failures are raised here.
        """
        self.__main_task = asyncio.create_task(self.serve())
        started_task = asyncio.create_task(self.started_evt.wait())
        done, _ = await asyncio.wait(
            [self.__main_task, started_task],
            return_when=asyncio.FIRST_COMPLETED
        )
        if self.__main_task in done:
            started_task.cancel()
            # serve() only returns early on error
            self.__main_task.result()
            raise Exception('Server stopped before it started listening')
        return self.__main_task

    async def wait_closed(self):
        if self.__main_task is not None:
            await self.__main_task

    async def terminate(self):
        tasks = list(self.clients)
        if self.__main_task is not None:
            tasks.append(self.__main_task)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self.clients = set()

    async def __handle_connection(self, connection:UniConnection):
        client_id = self.id_counter
        self.id_counter += 1
        wrapper = HTTPConnectionWrapper(client_id, connection)
        handler = self.client_handler()
        logger.debug('[%s] New client connected from %s' % (client_id, connection.get_peer_str()))
        try:
            while True:
                conn = wrapper.conn
                if h11.MUST_CLOSE in (conn.our_state, conn.their_state):
                    break
                if conn.states == {h11.CLIENT: h11.DONE, h11.SERVER: h11.DONE}:
                    conn.start_next_cycle()
                    continue

                event = await wrapper.next_event()
                if type(event) is h11.Request:
                    await handler._process_request(wrapper, event)
                    continue
                if type(event) is h11.ConnectionClosed:
                    break
                # request body parts (Data, EndOfMessage) carry nothing we use
        except h11.RemoteProtocolError as e:
            logger.debug('[%s] Protocol error from peer: %s' % (client_id, e))
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception('[%s] Connection handler failed' % client_id)
        finally:
            await wrapper.shutdown_and_clean_up()
            logger.debug('[%s] Client disconnected' % client_id)

    async def serve(self):
        async for connection in self.server.serve():
            task = asyncio.create_task(self.__handle_connection(connection))
            self.clients.add(task)
            task.add_done_callback(self.clients.discard)
