import os

from fastshareqr import logger
from fastshareqr.common.exceptions import PathRejected, ShareIOError
from fastshareqr.share.resolver import EntryKind, resolve, decode_tail, is_favicon
from fastshareqr.share.lister import list_directory
from fastshareqr.share.responder import respond_file
from fastshareqr.share.response import ShareResponse

LISTING_HEADERS = [
    ('Content-Type', 'text/html; charset=utf-8'),
]


def split_target(target:str) -> str:
    """
    Turns a request target into the tail path: query string and fragment
    dropped, leading slash removed. The tail stays percent-encoded.
    """
    path = target.split('?', 1)[0].split('#', 1)[0]
    return path[1:] if path.startswith('/') else path


class DirectoryRouter:
    """
    Routes requests for a shared directory tree. Directories are answered
    with a link listing, regular files with a download, everything else with 404.
    """
    def __init__(self, root:str):
        self.root = os.path.abspath(root)

    def route(self, tail:str) -> ShareResponse:
        if is_favicon(tail):
            return ShareResponse.not_found()
        try:
            decoded = decode_tail(tail)
            resolved = resolve(self.root, decoded)
            if resolved.kind == EntryKind.DIRECTORY:
                return ShareResponse.ok(list_directory(resolved.path, self.root), list(LISTING_HEADERS))
            elif resolved.kind == EntryKind.FILE:
                return respond_file(resolved.path)
            elif resolved.kind == EntryKind.OTHER:
                raise PathRejected(decoded, 'Unsupported entry type')
            raise PathRejected(decoded, 'Unknown entry kind %s' % resolved.kind)
        except PathRejected as e:
            logger.debug('Rejected %r: %s' % (tail, e.reason))
            return ShareResponse.not_found()
        except ShareIOError as e:
            if isinstance(e.innerexception, FileNotFoundError):
                return ShareResponse.not_found()
            logger.warning(str(e))
            return ShareResponse.server_error()
        except FileNotFoundError:
            # removed between resolving and listing
            return ShareResponse.not_found()
        except OSError as e:
            logger.warning('Failed to serve %r: %s' % (tail, e))
            return ShareResponse.server_error()


class FileRouter:
    """Serves one file at the root path, 404 for every other path."""
    def __init__(self, path:str):
        self.path = os.path.abspath(path)
        self.download_name = os.path.basename(self.path)

    def route(self, tail:str) -> ShareResponse:
        if tail != '':
            return ShareResponse.not_found()
        try:
            return respond_file(self.path, self.download_name)
        except ShareIOError as e:
            if isinstance(e.innerexception, FileNotFoundError):
                logger.debug('Shared file is gone: %s' % self.path)
                return ShareResponse.not_found()
            logger.warning(str(e))
            return ShareResponse.server_error()
