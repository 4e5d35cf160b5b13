from .change_record import ChangeRecord
from .descriptor import Descriptor, FieldKind, FieldSpec, Label, Nested
from .outcome import Changed, DiffReport, RenderFailed, Unchanged, ValueOutcome

__all__ = [
    "ChangeRecord",
    "Descriptor",
    "FieldKind",
    "FieldSpec",
    "Label",
    "Nested",
    "Changed",
    "DiffReport",
    "RenderFailed",
    "Unchanged",
    "ValueOutcome",
]
