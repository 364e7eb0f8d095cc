import sys
import asyncio
import logging
import argparse

from qrcode.exceptions import DataOverflowError

from fastshareqr import logger
from fastshareqr._version import __version__, __banner__
from fastshareqr.common.exceptions import StartupError
from fastshareqr.common.shareitem import ShareItem, ShareKind, ServerConfig
from fastshareqr.common.netutils import pick_unused_port, get_local_ip
from fastshareqr.common.qr import render_qr
from fastshareqr.share.server import get_share_link


def get_parser():
    parser = argparse.ArgumentParser(
        prog='fastshareqr',
        description='Share text, a file or a directory to other devices by scanning a QR code',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  %(prog)s -t "hello phone"                  # Encode the text itself
  %(prog)s -f ./report.pdf                   # Serve one file for download
  %(prog)s -d ./photos -p 8000               # Browse a directory on a fixed port
  %(prog)s -d ./photos -H 192.168.1.10       # Put this address in the link
        ''')

    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument('-t', '--text', help='Text you want to share')
    group.add_argument('-f', '--file', help='File you want to share')
    group.add_argument('-d', '--directory', help='Directory you want to share')

    parser.add_argument('-p', '--port', type=int, help='Server\'s port (default: a free port)')
    parser.add_argument('-H', '--hostname', help='Server\'s hostname in the link (default: local IP address)')
    parser.add_argument('--bind', default='0.0.0.0', help='Address to listen on (default: 0.0.0.0)')
    parser.add_argument('--disable-quiet-zone', action='store_true', help='Draw the QR code without its quiet zone')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    parser.add_argument('--version', '-v', action='version', version='fastshareqr %s' % __version__)
    return parser


def get_share_item(args) -> ShareItem:
    if args.text is not None:
        return ShareItem.text(args.text)
    if args.file is not None:
        return ShareItem.file(args.file)
    if args.directory is not None:
        return ShareItem.directory(args.directory)
    raise ValueError('One of text, file or directory must be given')


def get_server_config(item:ShareItem, args) -> ServerConfig:
    if args.port is not None and (args.port < 1 or args.port > 65535):
        raise StartupError('Port must be between 1 and 65535, got %s' % args.port)
    port = args.port if args.port is not None else pick_unused_port(args.bind)
    hostname = args.hostname if args.hostname else get_local_ip()
    return ServerConfig(item.value, hostname, port, bind_address=args.bind)


def print_code(link:str, quiet_zone:bool = True):
    print(render_qr(link, quiet_zone=quiet_zone))
    print(link)
    sys.stdout.flush()


async def amain(args):
    item = get_share_item(args)
    if item.kind == ShareKind.TEXT:
        link, _ = await get_share_link(item)
        print_code(link, not args.disable_quiet_zone)
        return

    config = get_server_config(item, args)
    link, server = await get_share_link(item, config)
    try:
        print_code(link, not args.disable_quiet_zone)
        await server.serve_forever()
    finally:
        await server.terminate()


def main():
    args = get_parser().parse_args()
    if args.debug is True:
        logger.setLevel(logging.DEBUG)
        print(__banner__)

    try:
        asyncio.run(amain(args))
    except KeyboardInterrupt:
        print('\nStopped by user')
    except StartupError as e:
        print('Error: %s' % e, file=sys.stderr)
        sys.exit(1)
    except DataOverflowError:
        print('Error: too much data to fit in a QR code', file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
