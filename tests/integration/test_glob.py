import pytest
from blobfs import glob
from tests.helpers.asserts import write_file


@pytest.fixture
def tree(bfs):
    for path in ["x/y/0.txt", "x/y/1.txt", "x/2.txt"]:
        bfs.makedirs(path.rsplit("/", 1)[0])
        write_file(bfs, path)
    return bfs


@pytest.mark.parametrize(
    "prefix, pattern, expected",
    [
        ("", "x/y/*.txt", ["x/y/0.txt", "x/y/1.txt"]),
        ("x/y", "x/y/*.txt", ["x/y/0.txt", "x/y/1.txt"]),
        ("", "x/*", ["x/2.txt", "x/y"]),
    ],
)
def test_glob_scoping(tree, prefix, pattern, expected):
    assert sorted(glob(tree, prefix, pattern)) == expected


def test_glob_single_wildcard_does_not_cross_separator(tree):
    assert "x/y/0.txt" not in glob(tree, "", "x/*")


def test_glob_question_mark(tree):
    assert sorted(glob(tree, "", "x/y/?.txt")) == ["x/y/0.txt", "x/y/1.txt"]


def test_glob_character_class(tree):
    assert glob(tree, "", "x/y/[0].txt") == ["x/y/0.txt"]


def test_glob_is_case_sensitive(tree):
    assert glob(tree, "", "X/*") == []


def test_glob_wildcard_in_middle_segment(tree):
    assert sorted(glob(tree, "", "*/*/*.txt")) == ["x/y/0.txt", "x/y/1.txt"]


def test_glob_top_level(tree):
    assert glob(tree, "", "*") == ["x"]


def test_glob_literal_pattern_uses_stat(tree, store):
    store.ops.clear()
    assert glob(tree, "", "x/2.txt") == ["x/2.txt"]
    assert [op.name for op in store.ops] == ["head", "list"]


def test_glob_literal_missing_returns_empty(tree):
    assert glob(tree, "", "x/missing.txt") == []


def test_glob_no_match_returns_empty(tree):
    assert glob(tree, "", "x/*.xyz") == []


def test_glob_under_missing_directory_returns_empty(tree):
    assert glob(tree, "", "nope/*") == []


def test_glob_under_regular_file_returns_empty(tree):
    assert glob(tree, "", "x/2.txt/*") == []


def test_glob_prefix_not_matching_pattern_returns_empty(tree):
    assert glob(tree, "z", "x/*") == []


def test_glob_prefix_deeper_than_pattern_returns_empty(tree):
    assert glob(tree, "x/y", "x") == []


def test_glob_prefix_matched_by_wildcard(tree):
    assert sorted(glob(tree, "x/y", "x/*/*.txt")) == ["x/y/0.txt", "x/y/1.txt"]


def test_glob_lists_only_the_literal_subtree(tree, store):
    write_file(tree, "other/deep/file.txt")
    store.ops.clear()
    glob(tree, "", "x/y/*.txt")
    listed = [op.args[0] for op in store.ops if op.name == "list"]
    assert listed == ["x/y/"]


def test_glob_lists_one_level_per_wildcard_segment(tree, store):
    store.ops.clear()
    glob(tree, "", "x/*")
    listed = [op.args[0] for op in store.ops if op.name == "list"]
    assert listed == ["x/"]


def test_glob_skips_markers(bfs):
    bfs.makedirs("m/n")
    assert glob(bfs, "", "m/*") == ["m/n"]
    assert glob(bfs, "", "m/n/*") == []


def test_glob_method_returns_sorted(tree):
    assert tree.glob("x/*") == ["x/2.txt", "x/y"]
    assert tree.glob("x/y/*.txt", prefix="x/y") == ["x/y/0.txt", "x/y/1.txt"]


class JoinWithSlashPrefix:
    """A FileSystem stand-in whose join keeps a leading slash."""

    def __init__(self, inner):
        self._inner = inner

    def stat(self, path):
        return self._inner.stat(path)

    def readdir(self, path):
        return self._inner.readdir(path)

    def join(self, *elems):
        return "/" + self._inner.join(*elems)


def test_glob_builds_matches_with_fs_join(tree):
    wrapped = JoinWithSlashPrefix(tree)
    assert sorted(glob(wrapped, "", "x/y/*.txt")) == ["/x/y/0.txt", "/x/y/1.txt"]
