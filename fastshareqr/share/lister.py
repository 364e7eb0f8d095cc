import os
import html
import urllib.parse


def _relative(path:str, share_root:str) -> str:
    relative = os.path.relpath(path, share_root)
    if relative == os.curdir:
        return ''
    if os.sep != '/':
        relative = relative.replace(os.sep, '/')
    return relative


def entry_href(entry_path:str, share_root:str) -> str:
    """
    Link target of an entry: its path with the sharing root stripped,
    '/' separated and percent-encoded.
    """
    relative = _relative(entry_path, share_root)
    return '/' + urllib.parse.quote(relative, safe='/', errors='surrogateescape')


def list_entries(directory:str):
    # immediate children only, sorted so listings are stable between requests
    return sorted(os.listdir(directory))


def list_directory(entry_root:str, share_root:str) -> bytes:
    """
    Generate the HTML listing of a directory.

    Args:
        entry_root (str): The resolved directory to list
        share_root (str): The sharing root, stripped from every link target

    Returns:
        bytes: UTF-8 encoded HTML document with one link per child
    """
    lines = []
    for name in list_entries(entry_root):
        href = entry_href(os.path.join(entry_root, name), share_root)
        lines.append('<a href="%s">%s</a><br />' % (html.escape(href), html.escape(name)))

    title = html.escape('/' + _relative(entry_root, share_root))
    document = '<!DOCTYPE html>\n<html>\n<head>\n<meta charset="UTF-8">\n<title>%s</title>\n</head>\n<body>\n%s\n</body>\n</html>\n' % (
        title,
        '\n'.join(lines)
    )
    return document.encode('utf-8', errors='surrogateescape')
