import re
from typing import Any, Final

OBJECT_ID_RE: Final[re.Pattern[str]] = re.compile(r"^[A-Fa-f0-9]{24}$")


def looks_like_object_id(value: Any) -> bool:
    """True for 24 hex digit document ids, either as strings or as id objects."""
    if not value:
        return False
    return bool(OBJECT_ID_RE.match(str(value)))
