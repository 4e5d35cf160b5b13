from pydantic import BaseModel, ConfigDict


class ChangeRecord(BaseModel):
    """One audited change: label path for display, structural path for addressing."""

    model_config = ConfigDict(frozen=True)

    label: str
    path: str
    old_text: str
    new_text: str
