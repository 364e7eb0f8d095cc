import os
import urllib.parse

from fastshareqr.common.exceptions import ShareIOError
from fastshareqr.share.response import ShareResponse

_UNSAFE_NAME_CHARS = set('";\\')


def content_disposition(download_name:str) -> str:
    """
    Content-Disposition value forcing a download under download_name.
    Names that can't go into a plain ASCII header use the RFC 5987 form.
    """
    if download_name.isascii() and download_name.isprintable() and not _UNSAFE_NAME_CHARS.intersection(download_name):
        return 'attachment;filename=%s' % download_name
    encoded = urllib.parse.quote(download_name, safe='', errors='surrogateescape')
    return "attachment;filename*=UTF-8''%s" % encoded


def download_headers(download_name:str):
    return [
        ('Content-Type', 'application/octet-stream'),
        ('Content-Disposition', content_disposition(download_name)),
    ]


def read_file(path:str) -> bytes:
    try:
        with open(path, 'rb') as f:
            return f.read()
    except OSError as e:
        raise ShareIOError(path, e)


def respond_file(path:str, download_name:str = None) -> ShareResponse:
    """
    Reads the whole file and wraps it in a download response.

    Args:
        path (str): The resolved file path
        download_name (str): Name offered to the client, defaults to the file's base name

    Returns:
        ShareResponse: 200 with the file bytes

    Raises:
        ShareIOError: when the file can't be read
    """
    if download_name is None:
        download_name = os.path.basename(path)
    body = read_file(path)
    return ShareResponse.ok(body, download_headers(download_name))
