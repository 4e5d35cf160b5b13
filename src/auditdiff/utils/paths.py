def bind_path(parent: str | None = None, key: str | None = None, index: int | None = None) -> str:
    """
    Appends a field key and an optional array index to a structural path.

    bind_path("root", "child", 0) -> "root.child[0]"
    """
    path = parent or ""
    if key:
        path = f"{path}.{key}" if path else key
    if index is not None:
        path = f"{path}[{index}]"
    return path


def bind_label(parent: str | None, label: str | None, delimiter: str) -> str:
    """Appends a human label to a label path using the configured delimiter."""
    if not label:
        return parent or ""
    return f"{parent}{delimiter}{label}" if parent else label
