import re

# Files up to this size are sent with one PUT; larger ones are split into parts of this size.
BATCH_SIZE = 10 * 1024 * 1024
# Max number of part uploads in flight at once.
MAX_WORKERS = 10
DEFAULT_PRESIGN_EXPIRY = 3600

_UNITS = ["B", "K", "M", "G", "T", "P"]

# Allows decimals (e.g., 16.5MB)
_PATTERN_SIZE_SUFFIX = re.compile(r"^(\d+(?:\.\d+)?)([A-Za-z]+)$")


def _from_size_suffix(size: str) -> int:
    size = size.strip()
    if size.isdigit():
        return int(size)
    match = _PATTERN_SIZE_SUFFIX.match(size)
    if match is None:
        raise ValueError(f"Invalid size suffix: {size}")
    n = float(match.group(1))
    # Only the first letter matters, "M", "MB" and "MiB" are all mebibytes.
    unit = match.group(2)[0].upper()
    if unit not in _UNITS:
        raise ValueError(f"Invalid size suffix: {size}")
    return int(n * 1024 ** _UNITS.index(unit))


def _to_size_suffix(size: int) -> str:
    if size < 0:
        raise ValueError(f"Invalid size: {size}")
    val: float = size
    for unit in _UNITS:
        if val < 1024 or unit == _UNITS[-1]:
            break
        val /= 1024
    if float(val).is_integer():
        return f"{int(val)}{unit}"
    return f"{val:.1f}{unit}"


def format_size(size_bytes: float) -> str:
    """Human readable size with two decimals, e.g. ``10.00 MB``."""
    for unit in ["B", "KB", "MB", "GB", "TB"]:
        if size_bytes < 1024.0:
            return f"{size_bytes:.2f} {unit}"
        size_bytes /= 1024.0
    return f"{size_bytes:.2f} PB"


class SizeSuffix:
    def __init__(self, size: "int | str | SizeSuffix"):
        self._size: int
        if isinstance(size, SizeSuffix):
            self._size = size._size
        elif isinstance(size, int):
            self._size = size
        elif isinstance(size, str):
            self._size = _from_size_suffix(size)
        else:
            raise ValueError(f"Invalid type for size: {type(size)}")

    def as_int(self) -> int:
        return self._size

    def as_str(self) -> str:
        return _to_size_suffix(self._size)

    def __repr__(self) -> str:
        return self.as_str()

    def __str__(self) -> str:
        return self.as_str()

    def __int__(self) -> int:
        return self._size

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, (int, SizeSuffix)):
            return NotImplemented
        return self._size == SizeSuffix(other)._size

    def __lt__(self, other: "int | SizeSuffix") -> bool:
        return self._size < SizeSuffix(other)._size

    def __le__(self, other: "int | SizeSuffix") -> bool:
        return self._size <= SizeSuffix(other)._size

    def __hash__(self) -> int:
        return hash(self._size)
