"""JSON serialization of transmuted classes."""

from __future__ import annotations

import json
from typing import Sequence

from gcsst.errors import SerializationError
from gcsst.model import ClassEntry


def serialize(
    entries: Sequence[ClassEntry], with_oneliner: bool = False, indent: int | None = 2
) -> str:
    """Encode *entries* as ``{"classes": [...]}``.

    ``oneliner`` keys are written only when *with_oneliner* is set.
    """
    payload = {"classes": [entry.to_dict(with_oneliner) for entry in entries]}
    try:
        return json.dumps(payload, indent=indent, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Failed to encode transmuted classes: {e}") from e
