import os

import pytest

from huffarc.paths import (
    create_dirs_for_file,
    dir_exists,
    file_exists,
    free_file_path,
    list_dir,
    path_concat,
    serialize_dir_paths,
    serialize_file_paths,
)


@pytest.fixture
def tree(tmp_path):
    root = tmp_path / "data"
    (root / "sub" / "deep").mkdir(parents=True)
    (root / "a.txt").write_bytes(b"a")
    (root / "sub" / "b.txt").write_bytes(b"b")
    (root / "sub" / "deep" / "c").write_bytes(b"c")
    return root


def test_dir_and_file_existence(tree):
    assert dir_exists(str(tree))
    assert not dir_exists(str(tree / "a.txt"))
    assert file_exists(str(tree / "a.txt"))
    assert not file_exists(str(tree / "missing"))
    assert not dir_exists(str(tree / "missing"))


def test_list_dir_finds_all_files_recursively(tree):
    found = list_dir(str(tree))
    expected = {
        f"{tree}{os.sep}a.txt",
        f"{tree}{os.sep}sub{os.sep}b.txt",
        f"{tree}{os.sep}sub{os.sep}deep{os.sep}c",
    }
    assert set(found) == expected
    assert len(found) == 3


def test_list_dir_of_missing_dir_is_empty(tmp_path):
    assert list_dir(str(tmp_path / "nothing")) == []


def test_serialize_dir_paths_keeps_dir_name(tree):
    abs_dir = os.path.realpath(str(tree))
    paths = list_dir(abs_dir)
    serialized = serialize_dir_paths(paths, str(tree))
    assert set(serialized) == {"data/a.txt", "data/sub/b.txt", "data/sub/deep/c"}


def test_serialize_dir_paths_removes_repeated_separators(tree):
    abs_dir = os.path.realpath(str(tree))
    path = f"{abs_dir}{os.sep}{os.sep}sub{os.sep}{os.sep}b.txt"
    assert serialize_dir_paths([path], str(tree)) == ["data/sub/b.txt"]


def test_serialize_file_paths_keeps_names():
    paths = [f"x{os.sep}y{os.sep}one.bin", "two.bin"]
    assert serialize_file_paths(paths) == ["one.bin", "two.bin"]


def test_serialize_file_paths_rejects_path_without_name():
    with pytest.raises(ValueError):
        serialize_file_paths(["ok.txt", f"dir{os.sep}"])


def test_create_dirs_for_file(tmp_path):
    target = f"{tmp_path}/x/y/file.txt"
    assert not dir_exists(f"{tmp_path}/x/y")
    create_dirs_for_file(target)
    assert dir_exists(f"{tmp_path}/x/y")
    assert not file_exists(target)
    create_dirs_for_file(target)
    assert dir_exists(f"{tmp_path}/x/y")
    assert list_dir(f"{tmp_path}/x") == []


def test_create_dirs_for_file_through_a_file_fails(tmp_path):
    (tmp_path / "blocker").write_bytes(b"")
    with pytest.raises(OSError):
        create_dirs_for_file(f"{tmp_path}/blocker/inner/file")


def test_path_concat():
    assert path_concat("/dest", "dir/file", "/") == "/dest/dir/file"
    assert path_concat("/dest/", "dir/file", "/") == "/dest/dir/file"
    assert path_concat("/dest", "/dir/file", "/") == "/dest/dir/file"
    assert path_concat("/dest", "", "/") == "/dest/"


def test_free_file_path_of_new_file_is_unchanged(tmp_path):
    target = f"{tmp_path}/new.txt"
    assert free_file_path(target) == target


def test_free_file_path_numbers_taken_names(tmp_path):
    (tmp_path / "a.txt").write_bytes(b"")
    (tmp_path / "a(1).txt").write_bytes(b"")
    assert free_file_path(f"{tmp_path}/a.txt") == f"{tmp_path}/a(2).txt"


def test_free_file_path_without_extension(tmp_path):
    (tmp_path / "plain").write_bytes(b"")
    assert free_file_path(f"{tmp_path}/plain") == f"{tmp_path}/plain(1)"


def test_free_file_path_splits_only_last_extension(tmp_path):
    (tmp_path / "arch.tar.gz").write_bytes(b"")
    assert free_file_path(f"{tmp_path}/arch.tar.gz") == f"{tmp_path}/arch.tar(1).gz"


def test_free_file_path_ignores_dots_in_directories(tmp_path):
    folder = tmp_path / "v1.2"
    folder.mkdir()
    (folder / "notes").write_bytes(b"")
    assert free_file_path(f"{folder}/notes") == f"{folder}/notes(1)"