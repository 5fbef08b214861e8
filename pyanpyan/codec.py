"""JSON wire format for checklist collections.

The stored document is a JSON array of checklist objects (see
Checklist.to_dict). Closed variants carry a "type" discriminator, ids are
bare strings, instants are UTC ISO-8601 and enums use their symbolic name.
"""

from __future__ import annotations

import json
from typing import Any, Iterable

from pyanpyan.models import Checklist


class CodecError(ValueError):
    """Raised for undecodable text (kind='json') or a wrong shape (kind='data')."""

    def __init__(self, kind: str, message: str) -> None:
        super().__init__(message)
        self.kind = kind


def encode_checklists(checklists: Iterable[Checklist]) -> str:
    return json.dumps([c.to_dict() for c in checklists], indent=2, ensure_ascii=False) + "\n"


def parse_json(text: str) -> Any:
    try:
        return json.loads(text)
    except (json.JSONDecodeError, TypeError) as e:
        raise CodecError("json", f"Malformed JSON: {e}") from e
    except RecursionError as e:
        raise CodecError("json", "Malformed JSON: nested too deeply") from e


def checklists_from_data(data: Any) -> list[Checklist]:
    if not isinstance(data, list):
        raise CodecError("data", f"Expected a JSON array of checklists, got {type(data).__name__}")
    checklists = []
    for index, entry in enumerate(data):
        try:
            checklists.append(Checklist.from_dict(entry))
        except (ValueError, TypeError) as e:
            raise CodecError("data", f"Invalid checklist at index {index}: {e}") from e
    return checklists


def decode_checklists(text: str) -> list[Checklist]:
    return checklists_from_data(parse_json(text))
