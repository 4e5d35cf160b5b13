from datetime import date, datetime
from typing import Any


class ValueRenderer:
    """
    Turns leaf values into display text.

    Subclass and pass to DiffService to change how dates, flags or plain
    values are shown. Methods may raise; the caller treats that as a render
    failure for the field.
    """

    def __init__(
        self,
        empty_label: str = "N/A",
        date_format: str = "%c",
        checked_label: str = "Checked",
        unchecked_label: str = "Unchecked",
    ) -> None:
        self.empty_label = empty_label
        self.date_format = date_format
        self.checked_label = checked_label
        self.unchecked_label = unchecked_label

    @staticmethod
    def is_temporal(value: Any) -> bool:
        return isinstance(value, date)

    @staticmethod
    def is_flag(value: Any) -> bool:
        return isinstance(value, bool)

    def render_temporal(self, value: Any) -> str:
        if value is None:
            return self.empty_label
        if isinstance(value, str):
            value = datetime.fromisoformat(value)
        if not isinstance(value, date):
            raise TypeError(f"Not a date: {value!r}")
        return value.strftime(self.date_format)

    def render_flag(self, value: bool | None) -> str:
        if value is None:
            return self.empty_label
        return self.checked_label if value else self.unchecked_label

    def render(self, value: Any) -> str:
        if value is None:
            return self.empty_label
        return str(value)
