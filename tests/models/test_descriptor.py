import pytest
from pydantic import ValidationError

from src.auditdiff.models import Descriptor, FieldKind, Label, Nested

bar_map = {"title": "Magic Title", "user": "Magic User"}
stack_map = {"name": "Stack item Name", "id": "Key"}


@pytest.fixture
def stack_descriptor() -> Descriptor:
    return Descriptor.array(
        stack_map,
        name="Foo Stack Table",
        key_fn=lambda a: a["name"],
        comparer=lambda a, b: a["id"] == b["id"],
    )


@pytest.fixture
def foo_descriptor(stack_descriptor: Descriptor) -> Descriptor:
    return Descriptor(
        field_map={
            "bar": Descriptor(field_map=bar_map, name="Bar"),
            "disabled": "Is Disabled",
            "title": "Magic Title",
            "stack": stack_descriptor,
        }
    )


class TestDescriptorFields:
    def test_field_names_keep_map_order(self, foo_descriptor: Descriptor):
        """Test that field names follow map insertion order."""
        assert foo_descriptor.field_names() == ("bar", "disabled", "title", "stack")

    def test_empty_map(self):
        """Test descriptors without a field map."""
        assert Descriptor().field_names() == ()
        assert Descriptor(field_map=None).field_names() == ()

    def test_field_kind(self, foo_descriptor: Descriptor):
        """Test kind of scalar, object and array entries."""
        assert foo_descriptor.field_kind("title") is FieldKind.FIELD
        assert foo_descriptor.field_kind("bar") is FieldKind.OBJECT
        assert foo_descriptor.field_kind("stack") is FieldKind.ARRAY
        assert foo_descriptor.field_kind("unknown") is None

    def test_description(self, foo_descriptor: Descriptor):
        """Test labels of scalar entries and names of nested entries."""
        assert foo_descriptor.description("title") == "Magic Title"
        assert foo_descriptor.description("bar") == "Bar"
        assert foo_descriptor.description("stack") == "Foo Stack Table"
        assert foo_descriptor.description("unknown") is None

    def test_nested(self, foo_descriptor: Descriptor, stack_descriptor: Descriptor):
        """Test access to nested descriptors."""
        assert foo_descriptor.nested("stack") is stack_descriptor
        assert foo_descriptor.nested("title") is None

    def test_entries_are_tagged(self, foo_descriptor: Descriptor):
        """Test that map entries are normalized to Label and Nested."""
        assert foo_descriptor.field_map["title"] == Label(text="Magic Title")
        assert isinstance(foo_descriptor.field_map["bar"], Nested)

    def test_malformed_entry_is_logged_and_dropped(self, capsys):
        """Test that an entry that is neither a label nor a descriptor is skipped."""
        descriptor = Descriptor(field_map={"title": "Title", "count": 5})

        assert descriptor.field_names() == ("title",)
        assert "count" in capsys.readouterr().err

    def test_field_kind_is_not_a_descriptor_kind(self):
        """Test that a descriptor cannot describe a scalar field."""
        with pytest.raises(ValidationError):
            Descriptor(field_map=bar_map, kind=FieldKind.FIELD)

    def test_frozen(self, foo_descriptor: Descriptor):
        """Test that descriptors are immutable."""
        with pytest.raises(ValidationError):
            foo_descriptor.name = "Other"  # type: ignore[misc]


class TestSameEntity:
    def test_comparer_takes_precedence(self, stack_descriptor: Descriptor):
        """Test that the comparer decides even when key_fn disagrees."""
        assert stack_descriptor.same_entity({"id": 1, "name": "a"}, {"id": 1, "name": "b"})
        assert not stack_descriptor.same_entity({"id": 1, "name": "a"}, {"id": 2, "name": "a"})

    def test_key_fn_fallback(self):
        """Test identity comparison through key_fn."""
        descriptor = Descriptor.array(stack_map, key_fn=lambda a: str(a["id"]))
        assert descriptor.same_entity({"id": 1}, {"id": 1})
        assert not descriptor.same_entity({"id": 1}, {"id": 2})

    def test_no_identity_never_matches(self):
        """Test that descriptors without identity never match."""
        descriptor = Descriptor.array(stack_map)
        item = {"id": 1}
        assert not descriptor.has_identity
        assert not descriptor.same_entity(item, item)

    def test_identity(self, stack_descriptor: Descriptor):
        """Test identity strings."""
        assert stack_descriptor.identity({"name": "First"}) == "First"
        assert Descriptor().identity({"name": "First"}) is None
