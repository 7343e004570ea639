import re
from typing import Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

HeaderPair = Tuple[str, str]

HeadersChangeListener = Callable[[List[HeaderPair]], None]
"""Called with a copy of the pairs after every edit."""

# RFC 9110 token characters
HEADER_NAME_PATTERN = r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$"
_HEADER_NAME_RE = re.compile(HEADER_NAME_PATTERN)


def is_valid_header_name(name: str) -> bool:
    """Check a header name is a non-empty HTTP token."""
    return bool(_HEADER_NAME_RE.fullmatch(name))


def headers_to_pairs(
    headers: Optional[Mapping[str, Union[str, Sequence[str], None]]],
) -> List[HeaderPair]:
    """Expand a header mapping into ordered pairs, one per value."""
    pairs: List[HeaderPair] = []
    for name, value in (headers or {}).items():
        if isinstance(value, (list, tuple)):
            pairs.extend((name, v) for v in value)
        else:
            pairs.append((name, value or ""))
    return pairs


def pairs_to_headers(pairs: Iterable[Sequence[str]]) -> Dict[str, str]:
    """
    Combine pairs into a mapping, joining repeated names with ", ".

    Names are compared case-insensitively; the first spelling seen is kept.
    """
    headers: Dict[str, str] = {}
    spellings: Dict[str, str] = {}
    for name, value in pairs:
        key = spellings.setdefault(name.lower(), name)
        if key in headers:
            headers[key] = f"{headers[key]}, {value}"
        else:
            headers[key] = value
    return headers


class HeaderPairs:
    """Ordered, editable list of header name/value pairs."""

    def __init__(
        self,
        pairs: Optional[Iterable[Sequence[str]]] = None,
        on_change: Optional[HeadersChangeListener] = None,
    ):
        self._pairs: List[List[str]] = [[name, value] for name, value in (pairs or [])]
        self._on_change = on_change

    @classmethod
    def from_headers(
        cls,
        headers: Optional[Mapping[str, Union[str, Sequence[str], None]]],
        on_change: Optional[HeadersChangeListener] = None,
    ) -> "HeaderPairs":
        return cls(headers_to_pairs(headers), on_change=on_change)

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change(self.to_pairs())

    def append(self, name: str = "", value: str = "") -> None:
        """Add a new row at the end. Value is converted to string."""
        self._pairs.append([name, str(value)])
        self._changed()

    def set_name(self, index: int, name: str) -> None:
        self._pairs[index][0] = name
        self._changed()

    def set_value(self, index: int, value: str) -> None:
        self._pairs[index][1] = str(value)
        self._changed()

    def remove(self, index: int) -> None:
        del self._pairs[index]
        self._changed()

    def get(self, name: str) -> Optional[str]:
        """Combined value of every row with this name, or None."""
        values = [v for n, v in self._pairs if n.lower() == name.lower()]
        return ", ".join(values) if values else None

    def invalid_indexes(self) -> List[int]:
        """Rows with a name that isn't a token, or an empty value."""
        return [
            i
            for i, (name, value) in enumerate(self._pairs)
            if not is_valid_header_name(name) or not value
        ]

    def to_pairs(self) -> List[HeaderPair]:
        return [(name, value) for name, value in self._pairs]

    def to_dict(self) -> Dict[str, str]:
        """Return the combined header dictionary."""
        return pairs_to_headers(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def __iter__(self) -> Iterator[HeaderPair]:
        return iter(self.to_pairs())
