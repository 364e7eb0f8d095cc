"""File download responses."""

import pytest

from fastshareqr.common.exceptions import ShareIOError
from fastshareqr.share.responder import respond_file, content_disposition


def test_file_is_served_as_download(share_root) -> None:
    response = respond_file(str(share_root / 'a.txt'))

    assert response.status_code == 200
    assert response.body == b'hi'
    assert response.get_header('Content-Type') == 'application/octet-stream'
    assert response.get_header('Content-Disposition') == 'attachment;filename=a.txt'


def test_binary_content_is_byte_identical(tmp_path) -> None:
    payload = bytes(range(256)) * 64
    target = tmp_path / 'blob.bin'
    target.write_bytes(payload)

    assert respond_file(str(target)).body == payload


def test_explicit_download_name(share_root) -> None:
    response = respond_file(str(share_root / 'a.txt'), 'other.txt')

    assert response.get_header('Content-Disposition') == 'attachment;filename=other.txt'


def test_non_ascii_name_uses_extended_form() -> None:
    assert content_disposition('été.txt') == "attachment;filename*=UTF-8''%C3%A9t%C3%A9.txt"


@pytest.mark.parametrize('name', ['a;b.txt', 'a"b.txt', 'a\\b.txt', 'a\nb.txt'])
def test_header_breaking_names_use_extended_form(name) -> None:
    value = content_disposition(name)

    assert value.startswith("attachment;filename*=UTF-8''")
    assert value.isascii() and value.isprintable()


def test_missing_file_raises_share_io_error(tmp_path) -> None:
    with pytest.raises(ShareIOError) as excinfo:
        respond_file(str(tmp_path / 'gone.txt'))

    assert isinstance(excinfo.value.innerexception, FileNotFoundError)
