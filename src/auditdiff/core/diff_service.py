from collections.abc import Callable, Iterable, Mapping
from typing import Any

from ..config.settings import DiffSettings
from ..exceptions import ValueRenderError
from ..models import (
    ChangeRecord,
    Changed,
    Descriptor,
    DiffReport,
    FieldKind,
    RenderFailed,
    Unchanged,
    ValueOutcome,
)
from ..utils.accessors import get_field
from ..utils.log import log
from ..utils.paths import bind_label, bind_path
from ..utils.render import ValueRenderer

ReferencePredicate = Callable[[Any], bool]


class DiffService:
    """
    Produces the audited changes between two snapshots of the same entity.

    The descriptor tree is read-only, so one service can serve any number of
    diff calls. Every call builds its own DiffReport.
    """

    def __init__(
        self,
        field_map: Descriptor | Mapping[str, Any],
        settings: DiffSettings | None = None,
        is_reference: ReferencePredicate | None = None,
        renderer: ValueRenderer | None = None,
    ) -> None:
        self.descriptor = field_map if isinstance(field_map, Descriptor) else Descriptor(field_map=field_map)
        self.settings = settings or DiffSettings()
        self.is_reference = is_reference
        self.renderer = renderer or self.settings.make_renderer()

    @property
    def delimiter(self) -> str:
        return self.settings.delimiter

    @property
    def empty_label(self) -> str:
        return self.renderer.empty_label

    def diff(self, old: Any, new: Any) -> list[ChangeRecord]:
        """Returns the ordered list of changes from old to new."""
        return self.report(old, new).changes

    def report(self, old: Any, new: Any) -> DiffReport:
        """Same as diff, but also returns the fields whose values could not be rendered."""
        report = DiffReport()
        self.collect(self.descriptor, new, old, "", "", report)
        return report

    def collect(
        self,
        descriptor: Descriptor,
        new: Any,
        old: Any,
        path: str,
        label: str,
        report: DiffReport,
    ) -> None:
        if new is None and old is None:
            return
        if new is None:
            report.changes.append(
                ChangeRecord(
                    label=label,
                    path=path,
                    old_text=self._entity_message("Delete", descriptor, old),
                    new_text=self.empty_label,
                )
            )
            return
        if old is None:
            report.changes.append(
                ChangeRecord(
                    label=label,
                    path=path,
                    old_text=self.empty_label,
                    new_text=self._entity_message("Create", descriptor, new),
                )
            )
            return

        if descriptor.has_identity and not descriptor.same_entity(new, old):
            # Another entity took this slot: one replacement record, no field diffs.
            report.changes.append(
                ChangeRecord(
                    label=label,
                    path=path,
                    old_text=self._identity_message("from", descriptor, old),
                    new_text=self._identity_message("to", descriptor, new),
                )
            )
            return

        for key in descriptor.field_names():
            field_path = bind_path(path, key)
            new_value = get_field(new, key)
            old_value = get_field(old, key)
            nested = descriptor.nested(key)

            match descriptor.field_kind(key):
                case FieldKind.FIELD:
                    field_label = bind_label(label, descriptor.description(key), self.delimiter)
                    outcome = self.compare_value(new_value, old_value, field_path, field_label)
                    if isinstance(outcome, Changed):
                        report.changes.append(outcome.record)
                    elif isinstance(outcome, RenderFailed):
                        report.failures.append(outcome)
                case FieldKind.OBJECT if nested is not None:
                    if self._is_reference(new_value) or self._is_reference(old_value):
                        continue
                    field_label = bind_label(label, nested.name or key, self.delimiter)
                    self.collect(nested, new_value, old_value, field_path, field_label, report)
                case FieldKind.ARRAY if nested is not None:
                    field_label = bind_label(label, nested.name or key, self.delimiter)
                    self.reconcile(nested, new_value, old_value, field_path, field_label, report)
                case _:
                    log(f"⚠️ Неизвестный тип поля '{key}' в {path or 'корне'}, пропускаю")

    def reconcile(
        self,
        descriptor: Descriptor,
        new_items: Iterable[Any] | None,
        old_items: Iterable[Any] | None,
        path: str,
        label: str,
        report: DiffReport,
    ) -> None:
        """
        Matches array elements by entity identity, not by position.

        Each new element takes the first unconsumed old element that is the
        same entity. Matched pairs are diffed at path[i], i being the match
        number; the rest become Create and Delete records at the array path.
        """
        created = list(new_items or [])
        deleted = list(old_items or [])
        consumed: set[int] = set()
        matches: list[tuple[Any, Any]] = []
        unmatched: list[Any] = []

        for item in created:
            found = None
            if descriptor.has_identity:
                for index, candidate in enumerate(deleted):
                    if index not in consumed and descriptor.same_entity(candidate, item):
                        found = index
                        break
            if found is None:
                unmatched.append(item)
            else:
                consumed.add(found)
                matches.append((item, deleted[found]))

        for position, (new_item, old_item) in enumerate(matches):
            if self._is_reference(new_item) or self._is_reference(old_item):
                continue
            self.collect(descriptor, new_item, old_item, bind_path(path, index=position), label, report)

        for item in unmatched:
            self.collect(descriptor, item, None, path, label, report)

        for index, item in enumerate(deleted):
            if index not in consumed:
                self.collect(descriptor, None, item, path, label, report)

    def compare_value(self, new: Any, old: Any, path: str, label: str) -> ValueOutcome:
        """Compares two leaf values and renders them when they differ."""
        try:
            if self.renderer.is_temporal(new) or self.renderer.is_temporal(old):
                old_text = self.renderer.render_temporal(old)
                new_text = self.renderer.render_temporal(new)
                if old_text == new_text:
                    return Unchanged()
            elif self._is_flag_pair(new, old):
                if new == old:
                    return Unchanged()
                old_text = self.renderer.render_flag(old)
                new_text = self.renderer.render_flag(new)
            else:
                if _strict_equal(new, old):
                    return Unchanged()
                old_text = self.renderer.render(old)
                new_text = self.renderer.render(new)
        except Exception as e:
            log(f"❌ Не удалось сравнить значение {path}: {e}")
            if self.settings.on_render_error == "raise":
                raise ValueRenderError(path, str(e)) from e
            return RenderFailed(label=label, path=path, reason=str(e))

        return Changed(record=ChangeRecord(label=label, path=path, old_text=old_text, new_text=new_text))

    def _is_flag_pair(self, new: Any, old: Any) -> bool:
        if not (self.renderer.is_flag(new) or self.renderer.is_flag(old)):
            return False
        return all(v is None or self.renderer.is_flag(v) for v in (new, old))

    def _is_reference(self, value: Any) -> bool:
        if self.is_reference is None or value is None:
            return False
        return bool(self.is_reference(value))

    def _entity_message(self, action: str, descriptor: Descriptor, instance: Any) -> str:
        message = f"{action} {descriptor.name}" if descriptor.name else action
        identity = descriptor.identity(instance)
        if identity is not None:
            message += f": {identity}"
        return message

    def _identity_message(self, prefix: str, descriptor: Descriptor, instance: Any) -> str:
        identity = descriptor.identity(instance)
        return f"{prefix}: {identity}" if identity is not None else prefix


def _strict_equal(new: Any, old: Any) -> bool:
    if isinstance(new, bool) != isinstance(old, bool):
        return False
    return bool(new == old)
