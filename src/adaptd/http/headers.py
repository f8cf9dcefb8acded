"""
=============================================================================
RESPONSE HEADER MAP
=============================================================================

Response headers need two things a plain dict cannot give us:

1. CASE-INSENSITIVE NAMES
   "content-type" and "Content-Type" are the same header (RFC 7230).
   Adapters written by different people must not end up setting both.

2. REPEATED HEADERS
   Set-Cookie is the classic case: each cookie is its own header line and
   they must NOT be folded into one comma-separated value.

    headers.set("X-Token", "abc")          # replace all values
    headers.add("Set-Cookie", "a=1")       # append a value
    headers.add("Set-Cookie", "b=2")
    headers.get_all("set-cookie")          # ["a=1", "b=2"]

Names are stored in canonical form ("x-forwarded-proto" becomes
"X-Forwarded-Proto") so serialized output looks the way people expect.

=============================================================================
"""

from typing import Dict, Iterator, List, Optional, Tuple


def canonical_header_name(name: str) -> str:
    """
    Canonicalize a header name: "x-forwarded-proto" → "X-Forwarded-Proto".
    """
    return "-".join(part.capitalize() for part in name.strip().split("-"))


class Headers:
    """
    Case-insensitive, multi-valued header map.

    Keys are canonicalized on every access, so lookups never care about
    the caller's spelling.
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._values: Dict[str, List[str]] = {}
        for name, value in (initial or {}).items():
            self.set(name, value)

    def set(self, name: str, value: str) -> None:
        """Replace every value of `name` with a single `value`."""
        self._values[canonical_header_name(name)] = [str(value)]

    def add(self, name: str, value: str) -> None:
        """Append `value` to `name`, keeping existing values."""
        self._values.setdefault(canonical_header_name(name), []).append(str(value))

    def get(self, name: str, default: str = "") -> str:
        """First value of `name`, or `default` if unset."""
        values = self._values.get(canonical_header_name(name))
        return values[0] if values else default

    def get_all(self, name: str) -> List[str]:
        """Every value of `name` in insertion order (empty list if unset)."""
        return list(self._values.get(canonical_header_name(name), []))

    def delete(self, name: str) -> None:
        self._values.pop(canonical_header_name(name), None)

    def items(self) -> Iterator[Tuple[str, str]]:
        """
        Iterate (name, value) pairs, one pair per header line.

        A header with two values yields two pairs; this is the shape
        serializers and test assertions want.
        """
        for name, values in self._values.items():
            for value in values:
                yield name, value

    def to_dict(self) -> Dict[str, str]:
        """
        Flatten to a plain dict, joining repeated values with ", ".

        Set-Cookie is the exception to comma folding (cookie values can
        contain commas), so only its last value survives here. Use
        get_all("Set-Cookie") when cookies matter.
        """
        flat = {}
        for name, values in self._values.items():
            if name == "Set-Cookie":
                flat[name] = values[-1]
            else:
                flat[name] = ", ".join(values)
        return flat

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and canonical_header_name(name) in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Headers({self.to_dict()!r})"
