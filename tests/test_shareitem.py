import os

import pytest

from fastshareqr.common.shareitem import ShareItem, ShareKind, ServerConfig


def test_constructors_pick_the_kind() -> None:
    assert ShareItem.text('hello').kind == ShareKind.TEXT
    assert ShareItem.file('a.txt').kind == ShareKind.FILE
    assert ShareItem.directory('.').kind == ShareKind.DIRECTORY
    assert ShareItem.text('hello').value == 'hello'


def test_share_item_is_read_only() -> None:
    item = ShareItem.text('hello')

    with pytest.raises(AttributeError):
        item.value = 'changed'
    with pytest.raises(AttributeError):
        item.kind = ShareKind.FILE


def test_share_item_rejects_unknown_kind() -> None:
    with pytest.raises(ValueError):
        ShareItem('text', 'hello')


def test_server_config_makes_root_absolute(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    config = ServerConfig('share', '192.168.1.2', 8000)

    assert config.root == os.path.join(str(tmp_path), 'share')
    assert config.hostname == '192.168.1.2'
    assert config.port == 8000
    assert config.bind_address == '0.0.0.0'


def test_server_config_is_read_only() -> None:
    config = ServerConfig('.', 'localhost', 8000)

    with pytest.raises(AttributeError):
        config.port = 9000


@pytest.mark.parametrize('port', [-1, 65536, '8000', None])
def test_server_config_rejects_bad_ports(port) -> None:
    with pytest.raises(ValueError):
        ServerConfig('.', 'localhost', port)


def test_server_config_requires_hostname() -> None:
    with pytest.raises(ValueError):
        ServerConfig('.', '', 8000)
