"""Path resolution and containment checks."""

import os

import pytest

from fastshareqr.common.exceptions import PathRejected
from fastshareqr.share.resolver import EntryKind, resolve, decode_tail, is_favicon


def test_empty_path_is_the_root(share_root) -> None:
    resolved = resolve(str(share_root), '')

    assert resolved.path == str(share_root)
    assert resolved.kind == EntryKind.DIRECTORY


def test_resolves_file_and_nested_file(share_root) -> None:
    assert resolve(str(share_root), 'a.txt').kind == EntryKind.FILE
    nested = resolve(str(share_root), 'sub/b.txt')

    assert nested.path == os.path.join(str(share_root), 'sub', 'b.txt')
    assert nested.kind == EntryKind.FILE


def test_leading_and_doubled_slashes_stay_relative(share_root) -> None:
    resolved = resolve(str(share_root), '//sub//./b.txt')

    assert resolved.path == os.path.join(str(share_root), 'sub', 'b.txt')


def test_parent_segments_inside_root_are_allowed(share_root) -> None:
    resolved = resolve(str(share_root), 'sub/../a.txt')

    assert resolved.path == os.path.join(str(share_root), 'a.txt')


def test_parent_segment_after_missing_component_is_rejected(share_root) -> None:
    with pytest.raises(PathRejected):
        resolve(str(share_root), 'nonexistent/../a.txt')


def test_parent_segment_after_a_file_is_rejected(share_root) -> None:
    with pytest.raises(PathRejected):
        resolve(str(share_root), 'a.txt/../sub')


def test_stepping_above_root_and_back_is_rejected(share_root) -> None:
    with pytest.raises(PathRejected):
        resolve(str(share_root), '../%s/a.txt' % share_root.name)


@pytest.mark.parametrize('path', [
    '..',
    '../secret.txt',
    'sub/../../secret.txt',
    '../../../../etc/passwd',
    'sub/../../share/../secret.txt',
])
def test_escaping_paths_are_rejected(share_root, outside_file, path) -> None:
    with pytest.raises(PathRejected):
        resolve(str(share_root), path)


def test_encoded_separators_cannot_escape(share_root, outside_file) -> None:
    for tail in ['..%2Fsecret.txt', '%2e%2e/secret.txt', '%2E%2E%2F%2E%2E%2Fetc%2Fpasswd']:
        with pytest.raises(PathRejected):
            resolve(str(share_root), decode_tail(tail))


def test_absolute_request_path_is_joined_below_root(share_root) -> None:
    with pytest.raises(PathRejected):
        resolve(str(share_root), '/etc/passwd')


def test_missing_path_is_rejected(share_root) -> None:
    with pytest.raises(PathRejected):
        resolve(str(share_root), 'missing')
    with pytest.raises(PathRejected):
        resolve(str(share_root), 'sub/missing/deeper')


def test_path_through_a_file_is_rejected(share_root) -> None:
    with pytest.raises(PathRejected):
        resolve(str(share_root), 'a.txt/anything')


def test_nul_byte_is_rejected(share_root) -> None:
    with pytest.raises(PathRejected):
        resolve(str(share_root), 'a.txt\x00.png')


@pytest.mark.skipif(not hasattr(os, 'symlink'), reason='no symlink support')
def test_symlink_to_outside_is_rejected(share_root, outside_file) -> None:
    os.symlink(str(outside_file), str(share_root / 'link.txt'))

    with pytest.raises(PathRejected):
        resolve(str(share_root), 'link.txt')


@pytest.mark.skipif(not hasattr(os, 'symlink'), reason='no symlink support')
def test_symlinked_directory_on_the_way_is_rejected(share_root) -> None:
    os.symlink(str(share_root / 'sub'), str(share_root / 'alias'))

    with pytest.raises(PathRejected):
        resolve(str(share_root), 'alias/b.txt')


@pytest.mark.skipif(not hasattr(os, 'symlink'), reason='no symlink support')
def test_linked_root_is_followed(share_root, tmp_path) -> None:
    link_root = tmp_path / 'linked'
    os.symlink(str(share_root), str(link_root))

    assert resolve(str(link_root), 'sub/b.txt').kind == EntryKind.FILE


@pytest.mark.skipif(not hasattr(os, 'mkfifo'), reason='no fifo support')
def test_special_files_are_other_kind(share_root) -> None:
    os.mkfifo(str(share_root / 'pipe'))

    assert resolve(str(share_root), 'pipe').kind == EntryKind.OTHER


def test_decode_tail_decodes_once() -> None:
    assert decode_tail('my%20file.txt') == 'my file.txt'
    assert decode_tail('%2541') == '%41'
    assert decode_tail('%C3%A9t%C3%A9') == 'été'


def test_decode_tail_rejects_invalid_utf8() -> None:
    with pytest.raises(PathRejected):
        decode_tail('%ff%fe')


def test_is_favicon() -> None:
    assert is_favicon('favicon.ico') is True
    assert is_favicon('sub/favicon.ico') is False
    assert is_favicon('') is False
