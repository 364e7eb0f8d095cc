import pytest


@pytest.fixture
def share_root(tmp_path):
    """
    root/
        a.txt      "hi"
        sub/b.txt  "bee"
    """
    root = tmp_path / 'share'
    root.mkdir()
    (root / 'a.txt').write_bytes(b'hi')
    sub = root / 'sub'
    sub.mkdir()
    (sub / 'b.txt').write_bytes(b'bee')
    return root


@pytest.fixture
def outside_file(tmp_path):
    secret = tmp_path / 'secret.txt'
    secret.write_bytes(b'top secret')
    return secret
