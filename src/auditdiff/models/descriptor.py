from __future__ import annotations

from collections.abc import Callable, Mapping
from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..utils.log import log


class FieldKind(str, Enum):
    FIELD = "Field"
    OBJECT = "Object"
    ARRAY = "Array"


class Label(BaseModel):
    """Scalar field shown under a human label."""

    model_config = ConfigDict(frozen=True)

    tag: Literal["label"] = "label"
    text: str


class Nested(BaseModel):
    """Nested object or array of objects described by its own descriptor."""

    model_config = ConfigDict(frozen=True)

    tag: Literal["nested"] = "nested"
    descriptor: Descriptor


FieldSpec = Annotated[Label | Nested, Field(discriminator="tag")]


class Descriptor(BaseModel):
    """
    Describes which fields of a type are audited and how.

    Each entry of field_map is either a label (scalar field) or a nested
    descriptor (object or array of objects). Fields missing from the map are
    never inspected. key_fn and comparer decide whether two instances are the
    same logical entity; comparer wins when both are set.
    """

    model_config = ConfigDict(frozen=True)

    field_map: dict[str, FieldSpec] = Field(default_factory=dict)
    name: str | None = None
    kind: FieldKind = FieldKind.OBJECT
    key_fn: Callable[[Any], str] | None = None
    comparer: Callable[[Any, Any], bool] | None = None

    @field_validator("field_map", mode="before")
    @classmethod
    def normalize_field_map(cls, v: Any) -> dict[str, Any]:
        if v is None:
            return {}
        if not isinstance(v, Mapping):
            raise ValueError("field_map должен быть словарём")
        entries: dict[str, Any] = {}
        for key, entry in v.items():
            if isinstance(entry, str):
                entries[key] = Label(text=entry)
            elif isinstance(entry, Descriptor):
                entries[key] = Nested(descriptor=entry)
            elif isinstance(entry, (Label, Nested)):
                entries[key] = entry
            else:
                log(f"⚠️ Поле '{key}' пропущено: ожидалась метка или Descriptor, получено {entry!r}")
        return entries

    @field_validator("kind")
    @classmethod
    def check_kind(cls, v: FieldKind) -> FieldKind:
        if v is FieldKind.FIELD:
            raise ValueError("Descriptor описывает объект или массив, а не поле")
        return v

    @classmethod
    def array(
        cls,
        field_map: Mapping[str, Any],
        name: str | None = None,
        key_fn: Callable[[Any], str] | None = None,
        comparer: Callable[[Any, Any], bool] | None = None,
    ) -> Descriptor:
        """Factory for a descriptor of an array of objects."""
        return cls(field_map=field_map, name=name, kind=FieldKind.ARRAY, key_fn=key_fn, comparer=comparer)

    @property
    def has_identity(self) -> bool:
        return self.comparer is not None or self.key_fn is not None

    def field_names(self) -> tuple[str, ...]:
        return tuple(self.field_map)

    def field_kind(self, key: str) -> FieldKind | None:
        spec = self.field_map.get(key)
        if spec is None:
            return None
        if isinstance(spec, Label):
            return FieldKind.FIELD
        return spec.descriptor.kind

    def description(self, key: str) -> str | None:
        spec = self.field_map.get(key)
        if spec is None:
            return None
        if isinstance(spec, Label):
            return spec.text
        return spec.descriptor.name

    def nested(self, key: str) -> Descriptor | None:
        spec = self.field_map.get(key)
        return spec.descriptor if isinstance(spec, Nested) else None

    def identity(self, instance: Any) -> str | None:
        if self.key_fn is None:
            return None
        return self.key_fn(instance)

    def same_entity(self, a: Any, b: Any) -> bool:
        if self.comparer is not None:
            return bool(self.comparer(a, b))
        if self.key_fn is not None:
            return self.key_fn(a) == self.key_fn(b)
        return False


Nested.model_rebuild()
