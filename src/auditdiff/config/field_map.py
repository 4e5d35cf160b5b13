from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..exceptions import FieldMapError
from ..models import Descriptor, FieldKind
from ..utils.accessors import get_field
from ..utils.log import log


class DescriptorConfig(BaseModel):
    """
    File form of a Descriptor.

    Example:
        name: Order
        fields:
          title: Title
          lines:
            name: Order line
            kind: array
            key: sku
            fields:
              qty: Quantity

    An entry that is neither a label nor a nested mapping is logged and
    skipped, like malformed entries of a Descriptor built in code.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    kind: Literal["object", "array"] = "object"
    key: str | None = None
    field_map: dict[str, str | DescriptorConfig] = Field(default_factory=dict, alias="fields")

    @field_validator("field_map", mode="before")
    @classmethod
    def drop_malformed_entries(cls, v: Any) -> Any:
        if not isinstance(v, dict):
            return v
        entries: dict[str, Any] = {}
        for key, entry in v.items():
            if isinstance(entry, (str, dict, DescriptorConfig)):
                entries[key] = entry
            else:
                log(f"⚠️ Поле '{key}' пропущено: ожидалась метка или вложенная карта, получено {entry!r}")
        return entries

    @field_validator("key")
    @classmethod
    def validate_key(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            raise ValueError("key не может быть пустой строкой")
        return v

    def to_descriptor(self) -> Descriptor:
        field_map: dict[str, Any] = {
            name: entry if isinstance(entry, str) else entry.to_descriptor() for name, entry in self.field_map.items()
        }
        return Descriptor(
            field_map=field_map,
            name=self.name,
            kind=FieldKind.ARRAY if self.kind == "array" else FieldKind.OBJECT,
            key_fn=_key_reader(self.key) if self.key else None,
        )


def _key_reader(key: str):
    def read(instance: Any) -> str:
        return str(get_field(instance, key))

    return read


def read_document(path: Path) -> Any:
    """Reads a YAML or JSON document; JSON is parsed strictly when the suffix says so."""
    with open(path, encoding="utf-8") as f:
        if path.suffix.lower() == ".json":
            return json.load(f)
        return yaml.safe_load(f)


def load_descriptor(path: Path | str) -> Descriptor:
    """Builds a Descriptor tree from a YAML or JSON field map file."""
    path = Path(path)
    try:
        data = read_document(path)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise FieldMapError(f"Не удалось прочитать карту полей {path}: {e}") from e

    if not isinstance(data, dict):
        raise FieldMapError(f"Карта полей {path} должна быть словарём")
    if not isinstance(data.get("fields"), dict):
        # "fields" holding a label is an audited field of a bare map
        data = {"fields": data}

    try:
        config = DescriptorConfig.model_validate(data)
    except ValidationError as e:
        raise FieldMapError(f"Некорректная карта полей {path}: {e}") from e
    if config.kind == "array":
        raise FieldMapError(f"Корень карты полей {path} должен описывать объект")
    return config.to_descriptor()
