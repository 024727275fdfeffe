import pytest
from blobfs import is_not_exist
from tests.helpers.asserts import write_file


def test_stat_root_is_directory(bfs, store):
    info = bfs.stat(".")
    assert info["is_dir"] is True
    assert info["size"] == 0
    assert bfs.stat("/")["is_dir"] is True
    assert store.ops == []


def test_stat_regular_file(bfs):
    write_file(bfs, "dir/f.bin", b"12345")
    info = bfs.stat("dir/f.bin")
    assert info["name"] == "f.bin"
    assert info["is_dir"] is False
    assert info["size"] == 5
    assert info["modified_at"] is not None


def test_stat_leading_slash_is_same_path(bfs):
    write_file(bfs, "/foo2", b"qux")
    assert bfs.stat("foo2")["size"] == 3
    assert bfs.stat("/foo2")["size"] == 3


def test_stat_synthetic_directory(bfs):
    write_file(bfs, "x/y/0.txt")
    info = bfs.stat("x")
    assert info == {"name": "x", "size": 0, "is_dir": True, "modified_at": None}
    assert bfs.stat("x/y")["is_dir"] is True


def test_stat_children_dominate_leaf_object(bfs):
    write_file(bfs, "qux/p", b"x")
    write_file(bfs, "qux/p/c", b"x")
    assert bfs.stat("qux/p")["is_dir"] is True
    assert bfs.stat("qux/p/c")["is_dir"] is False


def test_dominated_leaf_object_is_still_readable(bfs):
    write_file(bfs, "p", b"leaf")
    write_file(bfs, "p/c", b"child")
    with bfs.open("p") as f:
        assert f.read() == b"leaf"


def test_stat_missing_raises_not_exist(bfs):
    with pytest.raises(FileNotFoundError) as excinfo:
        bfs.stat("/missing/z")
    assert is_not_exist(excinfo.value)


def test_stat_below_regular_file_is_not_exist(bfs):
    write_file(bfs, "p1/p2/p3/c")
    with pytest.raises(FileNotFoundError):
        bfs.stat("p1/p2/p3/c/doesntexist")


def test_stat_prefix_sibling_is_not_child(bfs):
    # "ab" shares a string prefix with "a" but is not under "a/".
    write_file(bfs, "ab")
    with pytest.raises(FileNotFoundError):
        bfs.stat("a")


def test_stat_intermediate_levels_are_directories(bfs):
    write_file(bfs, "qux/p1/p2", b"x")
    write_file(bfs, "qux/p1/p2/p3/c", b"x")
    for path in ["qux", "qux/p1", "qux/p1/p2", "qux/p1/p2/p3"]:
        assert bfs.stat(path)["is_dir"] is True, path


def test_stat_traversal_raises_value_error(bfs):
    with pytest.raises(ValueError, match="traversal"):
        bfs.stat("../etc")


def test_stat_issues_one_head_and_one_bounded_list(bfs, store):
    write_file(bfs, "a/b")
    store.ops.clear()
    bfs.stat("a")
    assert [op.name for op in store.ops] == ["head", "list"]
    assert store.ops[1].args == ("a/", "/")


def test_exists_is_dir_is_file(bfs):
    write_file(bfs, "d/f.bin")
    assert bfs.exists("d") and bfs.exists("d/f.bin")
    assert not bfs.exists("nope")
    assert bfs.is_dir("d") is True
    assert bfs.is_dir("d/f.bin") is False
    assert bfs.is_file("d/f.bin") is True
    assert bfs.is_file("d") is False
    assert bfs.is_file("missing") is False


def test_exists_with_traversal_path_returns_false(bfs):
    assert bfs.exists("/../etc/passwd") is False
    assert bfs.is_dir("/../etc") is False


def test_get_size(bfs):
    write_file(bfs, "f.bin", b"x" * 42)
    assert bfs.get_size("f.bin") == 42


def test_get_size_on_directory_raises(bfs):
    write_file(bfs, "d/f.bin")
    with pytest.raises(IsADirectoryError):
        bfs.get_size("d")


def test_stat_sees_replaced_object_size(bfs):
    write_file(bfs, "f", b"long content")
    write_file(bfs, "f", b"x")
    assert bfs.stat("f")["size"] == 1
