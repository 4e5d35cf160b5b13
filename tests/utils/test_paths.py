import pytest

from src.auditdiff.utils.paths import bind_label, bind_path


@pytest.mark.parametrize(
    ("args", "expected"),
    [
        ((None, None), ""),
        (("root",), "root"),
        ((None, "child"), "child"),
        (("root", "child"), "root.child"),
        (("root", "child", 0), "root.child[0]"),
        (("root", "child", 4), "root.child[4]"),
        (("", "child"), "child"),
        (("stack", None, 2), "stack[2]"),
        (("stack[2]", "name"), "stack[2].name"),
    ],
)
def test_bind_path(args, expected):
    """Test structural path composition."""
    assert bind_path(*args) == expected


def test_bind_path_no_arguments():
    """Test that the root path is empty."""
    assert bind_path() == ""


class TestBindLabel:
    def test_first_label_has_no_delimiter(self):
        """Test label at the root of the label path."""
        assert bind_label("", "Title", " -> ") == "Title"

    def test_nested_label(self):
        """Test label appended to a parent label path."""
        assert bind_label("Foo Stack Table", "Name", " -> ") == "Foo Stack Table -> Name"

    def test_custom_delimiter(self):
        """Test label path with a custom delimiter."""
        assert bind_label("Order", "Line", " / ") == "Order / Line"

    def test_missing_label_keeps_parent(self):
        """Test that an empty label does not add a delimiter."""
        assert bind_label("Order", None, " -> ") == "Order"
        assert bind_label(None, None, " -> ") == ""
