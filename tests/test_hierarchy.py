import pytest

from difftree.core.changes import ChangeRecord
from difftree.core.errors import FormatError
from difftree.core.hierarchy import (
    HierarchyNode,
    build_from_text,
    build_hierarchy,
    count,
    depth,
    total_changes,
    walk,
)


def assert_count_identity(node):
    expected = sum(1 if c.changes else 0 for c in node.children.values())
    expected += sum(count(c) for c in node.children.values())
    assert count(node) == expected
    for child in node.children.values():
        assert_count_identity(child)


def test_add_and_delete_under_same_directory():
    root = build_from_text("+\t/a/b.txt\n-\t/a/c.txt\n")

    assert list(root.children) == ["a"]
    a = root.children["a"]
    assert a.changes is None
    assert sorted(a.children) == ["b.txt", "c.txt"]
    assert a.children["b.txt"].changes == [ChangeRecord("+")]
    assert a.children["c.txt"].changes == [ChangeRecord("-")]
    assert count(root) == 2
    assert count(a) == 2


def test_rename_lands_on_source_path():
    root = build_from_text("R\t/old/name -> /new/name\n")

    leaf = root.children["old"].children["name"]
    assert leaf.changes == [ChangeRecord("R", moved_to="/new/name")]
    assert "new" not in root.children


def test_invalid_line_builds_empty_tree():
    root = build_from_text("not a valid line\n")
    assert root.children == {}
    assert not root.changes
    assert count(root) == 0


def test_missing_rename_destination_aborts_build():
    with pytest.raises(FormatError) as exc:
        build_from_text("+\t/fine\nR\t/x/y\n")
    assert exc.value.code == "missing_rename_destination"


def test_relative_path_aborts_build():
    with pytest.raises(FormatError) as exc:
        build_from_text("+\t/fine\n+\trelative/path\n")
    assert exc.value.code == "path_not_absolute"
    assert exc.value.subject == "relative/path"


def test_builtin_member_names_are_plain_keys():
    root = build_from_text(
        "+\t/constructor/__proto__\n"
        "-\t/constructor/hasOwnProperty\n"
        "M\t/__class__/items/keys\n"
    )
    assert sorted(root.children) == ["__class__", "constructor"]
    assert sorted(root.children["constructor"].children) == ["__proto__", "hasOwnProperty"]
    assert root.children["__class__"].children["items"].children["keys"].changes == [ChangeRecord("M")]
    assert count(root) == 3


def test_same_path_accumulates_records():
    root = build_from_text("+\t/a/x\n-\t/a/x\nM\t/a/x\n")
    assert root.children["a"].children["x"].changes == [
        ChangeRecord("+"),
        ChangeRecord("-"),
        ChangeRecord("M"),
    ]
    assert count(root) == 1


def test_trailing_slash_attaches_to_directory_node():
    root = build_from_text("M\t/a/\nM\t/\n")
    assert root.changes == [ChangeRecord("M")]
    assert root.children["a"].changes == [ChangeRecord("M")]
    assert root.children["a"].children == {}


def test_interior_empty_segment_is_a_key():
    root = build_from_text("+\t/a//b\n")
    assert list(root.children["a"].children) == [""]
    assert root.children["a"].children[""].children["b"].changes == [ChangeRecord("+")]


def test_record_count_matches_matching_lines():
    text = "\n".join(
        [
            "+\t/usr/bin/tool",
            "-\t/usr/bin/old",
            "M\t/usr/bin",
            "garbage",
            "",
            "R\t/home/u/a -> /home/u/b",
            "M\t/home/u",
            "+\t/home/u/a",
        ]
    )
    root = build_from_text(text)
    assert total_changes(root) == 6
    assert_count_identity(root)


def test_build_hierarchy_from_pairs():
    root = build_hierarchy([(ChangeRecord("+"), "/x/y"), (ChangeRecord("M"), "/x")])
    assert root.children["x"].changes == [ChangeRecord("M")]
    assert count(root) == 2


def test_walk_is_sorted_depth_first():
    root = build_from_text("+\t/b/z\n+\t/a/y\n+\t/a/x\n")
    assert [path for path, _ in walk(root)] == ["/a", "/a/x", "/a/y", "/b", "/b/z"]


def test_get_child_reuses_existing_node():
    root = HierarchyNode()
    first = root.get_child("etc")
    assert root.get_child("etc") is first
    assert root.is_empty() is False
    assert first.is_empty() is True


def test_deep_path_builds_and_counts():
    root = build_from_text("+\t" + "/d" * 1200 + "\n" + "M\t" + "/d" * 600 + "\n")

    node = root
    for _ in range(1200):
        node = node.children["d"]
    assert node.changes == [ChangeRecord("+")]
    assert node.children == {}

    assert count(root) == 2
    assert total_changes(root) == 2
    assert depth(root) == 1200
    paths = [path for path, _ in walk(root)]
    assert len(paths) == 1200
    assert paths[-1] == "/d" * 1200


def test_depth():
    assert depth(HierarchyNode()) == 0
    assert depth(build_from_text("+\t/a/b/c\n+\t/x\n")) == 3


def test_crlf_input_keys_have_no_carriage_return():
    root = build_from_text("+\t/a/b.txt\r\nR\t/a -> /b\r\n")
    assert list(root.children["a"].children) == ["b.txt"]
    assert root.children["a"].changes == [ChangeRecord("R", moved_to="/b")]
