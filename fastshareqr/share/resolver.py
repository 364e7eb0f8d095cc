import os
import stat
import enum
import urllib.parse

from fastshareqr.common.exceptions import PathRejected

FAVICON_PATH = 'favicon.ico'


class EntryKind(enum.Enum):
    DIRECTORY = 1
    FILE = 2
    OTHER = 3


class ResolvedPath:
    def __init__(self, path:str, kind:EntryKind):
        self.path = path
        self.kind = kind

    def __repr__(self):
        return 'ResolvedPath(%r, %s)' % (self.path, self.kind.name)


def is_favicon(tail:str) -> bool:
    # browsers ask for it on every page, it is never looked up
    return tail == FAVICON_PATH


def decode_tail(tail:str) -> str:
    """
    Percent-decodes the raw tail path exactly once.

    Args:
        tail (str): The raw request path without the leading slash

    Returns:
        str: The decoded path

    Raises:
        PathRejected: when the decoded bytes are not valid UTF-8
    """
    raw = urllib.parse.unquote_to_bytes(tail)
    try:
        return raw.decode('utf-8')
    except UnicodeDecodeError:
        raise PathRejected(tail, 'Path is not valid UTF-8')


def _split_segments(decoded_path:str):
    segments = []
    for segment in decoded_path.split('/'):
        if not segment or segment == '.':
            continue
        if '\x00' in segment:
            raise PathRejected(decoded_path, 'NUL byte in path')
        if os.sep in segment or (os.altsep and os.altsep in segment):
            raise PathRejected(decoded_path, 'Separator inside path segment')
        segments.append(segment)
    return segments


def _entry_kind(mode:int) -> EntryKind:
    if stat.S_ISDIR(mode):
        return EntryKind.DIRECTORY
    if stat.S_ISREG(mode):
        return EntryKind.FILE
    return EntryKind.OTHER


def resolve(root:str, decoded_path:str) -> ResolvedPath:
    """
    Joins a decoded request path onto the sharing root and checks that the
    result stays inside it.

    The containment check runs on the normalized path string, before any
    filesystem access. Afterwards the segments are walked from the root, every
    named component is lstat-ed and a parent segment goes back to the checked
    parent: missing components, symbolic links and steps above the root reject
    the path.

    Args:
        root (str): Absolute path of the shared directory
        decoded_path (str): Percent-decoded request path, '/' separated

    Returns:
        ResolvedPath: The absolute path and its entry kind

    Raises:
        PathRejected: when the path escapes the root, does not exist or crosses a symlink
    """
    root = os.path.normpath(os.path.abspath(root))
    segments = _split_segments(decoded_path)
    candidate = os.path.normpath(os.path.join(root, *segments))

    try:
        if os.path.commonpath([root, candidate]) != root:
            raise PathRejected(decoded_path, 'Path escapes the sharing root')
    except ValueError:
        # different drives on Windows
        raise PathRejected(decoded_path, 'Path escapes the sharing root')

    current = root
    try:
        # the root itself may be a link, the user picked it
        trail = [(root, os.stat(root))]
        for segment in segments:
            current, st = trail[-1]
            if not stat.S_ISDIR(st.st_mode):
                raise PathRejected(decoded_path, 'Not a directory: %s' % current)
            if segment == os.pardir:
                if len(trail) == 1:
                    raise PathRejected(decoded_path, 'Path steps above the sharing root')
                trail.pop()
                continue
            current = os.path.join(current, segment)
            st = os.lstat(current)
            if stat.S_ISLNK(st.st_mode):
                raise PathRejected(decoded_path, 'Symbolic link: %s' % current)
            trail.append((current, st))
    except (FileNotFoundError, NotADirectoryError):
        raise PathRejected(decoded_path, 'No such path: %s' % current)

    current, st = trail[-1]
    return ResolvedPath(current, _entry_kind(st.st_mode))
