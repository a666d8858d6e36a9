"""Tests for storage backends."""

import pytest

from minigit.core.errors import NotFoundError
from minigit.core.storage import FileStorage, MemoryStorage


@pytest.fixture(params=['file', 'memory'])
def storage(request, temp_dir):
    if request.param == 'file':
        return FileStorage(temp_dir)
    return MemoryStorage()


def test_write_then_read(storage):
    storage.write('a/b/c.txt', b'data')
    assert storage.read('a/b/c.txt') == b'data'
    assert storage.exists('a/b/c.txt')
    assert storage.exists('a/b')


def test_read_missing(storage):
    with pytest.raises(NotFoundError):
        storage.read('missing.txt')


def test_overwrite(storage):
    storage.write('f', b'one')
    storage.write('f', b'two')
    assert storage.read('f') == b'two'


def test_remove(storage):
    storage.write('f', b'x')
    storage.remove('f')
    assert not storage.exists('f')
    # Removing again is fine
    storage.remove('f')


def test_text_helpers(storage):
    storage.write_text('t.txt', 'héllo\n')
    assert storage.read_text('t.txt') == 'héllo\n'


def test_mkdir(storage):
    storage.mkdir('x/y')
    assert storage.exists('x/y')


def test_list_files_under(storage):
    storage.write('b.txt', b'')
    storage.write('a/one.txt', b'')
    storage.write('a/sub/two.txt', b'')
    storage.write('ab.txt', b'')

    assert storage.list_files_under('') == ['a/one.txt', 'a/sub/two.txt', 'ab.txt', 'b.txt']
    assert storage.list_files_under('a') == ['a/one.txt', 'a/sub/two.txt']
    assert storage.list_files_under('nope') == []


def test_paths_are_normalized(storage):
    storage.write('./dir//file.txt', b'z')
    assert storage.read('dir/file.txt') == b'z'


def test_memory_storage_rejects_text():
    with pytest.raises(TypeError):
        MemoryStorage().write('f', 'not bytes')
