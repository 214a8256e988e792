"""
Multi-valued query parameter store.
"""
from typing import Dict, Iterator, List, Tuple
from urllib.parse import urlencode


class QueryParams:
    """Ordered multi-map of query parameter name -> values.

    Values are kept raw; encoding happens in encode(). Keys are emitted in
    sorted order and each key's values in insertion order, so the encoded
    form is deterministic regardless of the order keys were added.
    """

    def __init__(self) -> None:
        self._values: Dict[str, List[str]] = {}

    def add(self, name: str, value: str) -> None:
        """Append a value for name. Duplicates are kept."""
        self._values.setdefault(name, []).append(value)

    def get_list(self, name: str) -> List[str]:
        """All values for name, in insertion order."""
        return list(self._values.get(name, []))

    def items(self) -> Iterator[Tuple[str, str]]:
        """Flattened (name, value) pairs in encoding order."""
        for name in sorted(self._values):
            for value in self._values[name]:
                yield name, value

    def encode(self) -> str:
        """Percent-encode as a query string (spaces become '+')."""
        return urlencode(list(self.items()))

    def copy(self) -> "QueryParams":
        clone = QueryParams()
        clone._values = {name: list(values) for name, values in self._values.items()}
        return clone

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __bool__(self) -> bool:
        return bool(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, QueryParams):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        return f"QueryParams({self._values!r})"
