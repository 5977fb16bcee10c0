"""Display helpers."""

SIZE_UNITS = ["Bytes", "KB", "MB", "GB", "TB"]


def format_bytes(size: int, decimals: int = 2) -> str:
    """Human-readable size, e.g. ``1.5 KB`` or ``4 MB``."""
    if size <= 0:
        return "0 Bytes"

    i = 0
    while i < len(SIZE_UNITS) - 1 and size >= 1024 ** (i + 1):
        i += 1
    value = round(size / 1024**i, max(decimals, 0))
    return f"{value:g} {SIZE_UNITS[i]}"
