"""Share documents – the JSON layout point sets are stored in.

    {
      "keys": {"n": 4, "k": 3},
      "1": {"base": "10", "value": "4"},
      "2": {"base": "2",  "value": "111"},
      "3": {"base": "10", "value": "12"},
      "6": {"base": "4",  "value": "213"}
    }

Every all-digit key is an x-coordinate; its entry's ``value`` is a numeral
in ``base``.  Other keys besides ``keys`` are ignored.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Union

from pydantic import BaseModel, ValidationError, field_validator, model_validator

from polyrecon.arith.digits import decode, decode_lenient
from polyrecon.interp.points import Point, PointSet, select_points

logger = logging.getLogger(__name__)

_X_KEY = re.compile(r"[0-9]+")


class ShareDocumentError(ValueError):
    """Raised when a share document is malformed."""


class KeysSpec(BaseModel):
    """Threshold parameters: n shares issued, k needed."""

    n: int
    k: int

    @model_validator(mode="after")
    def _check_threshold(self) -> "KeysSpec":
        if self.k < 1 or self.k > self.n:
            raise ValueError(f"Invalid threshold: k={self.k}, n={self.n}")
        return self


class ShareEntry(BaseModel):
    """One stored share: the document key, a numeral and its base."""

    key: str
    base: int
    value: str

    @field_validator("value", mode="before")
    @classmethod
    def _value_to_str(cls, v: Any) -> str:
        if isinstance(v, bool) or not isinstance(v, (str, int)):
            raise ValueError("value must be a string or integer")
        return str(v)

    @property
    def x(self) -> int:
        return int(self.key)

    def decode(self, strict: bool = True) -> int:
        if strict:
            return decode(self.value, self.base)
        return decode_lenient(self.value, self.base)


class ShareDocument(BaseModel):
    keys: KeysSpec
    entries: List[ShareEntry]  # document order

    def candidates(self, strict: bool = True) -> List[Point]:
        """Decode every entry, in document order.

        *strict* picks the decoder: strict rejects any stray character,
        lenient skips separators such as spaces and underscores.
        """
        return [Point(e.x, e.decode(strict)) for e in self.entries]

    def select(self, strict: bool = True) -> PointSet:
        """The k points a reconstruction uses (ascending x, first k)."""
        return select_points(self.candidates(strict), self.keys.k)


def parse_document(data: Dict[str, Any]) -> ShareDocument:
    """Validate a decoded JSON object and build a ``ShareDocument``."""
    if not isinstance(data, dict):
        raise ShareDocumentError("share document must be a JSON object")
    if "keys" not in data:
        raise ShareDocumentError("share document has no 'keys' section")

    entries: List[Dict[str, Any]] = []
    for key, raw in data.items():
        if key == "keys" or not _X_KEY.fullmatch(key):
            continue
        if not isinstance(raw, dict):
            raise ShareDocumentError(f"entry {key!r} must be an object")
        entries.append({**raw, "key": key})

    try:
        doc = ShareDocument(keys=data["keys"], entries=entries)
    except ValidationError as exc:
        raise ShareDocumentError(f"invalid share document: {exc}") from exc

    logger.debug("parsed share document: n=%d k=%d entries=%d",
                 doc.keys.n, doc.keys.k, len(doc.entries))
    return doc


def load_document(path: Union[str, Path]) -> ShareDocument:
    """Read and parse a share document from *path*."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf8"))
    except json.JSONDecodeError as exc:
        raise ShareDocumentError(f"{path}: not valid JSON ({exc})") from exc
    logger.info("loaded share document %s", path)
    return parse_document(data)
