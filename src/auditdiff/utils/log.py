import sys


def log(message: str, indent: int = 0, padding_top: int = 0) -> None:
    """
    Custom print function that supports indentation and top padding.
    Writes to stderr so diagnostics never mix with CLI output.
    """
    for _ in range(padding_top):
        print(file=sys.stderr)
    prefix = "  " * indent

    # Handle encoding issues in Windows console
    output_message = f"{prefix}{message}"
    try:
        print(output_message, file=sys.stderr)
    except UnicodeEncodeError:
        # Fallback to ASCII representation if Unicode fails
        print(output_message.encode("ascii", errors="replace").decode("ascii"), file=sys.stderr)
