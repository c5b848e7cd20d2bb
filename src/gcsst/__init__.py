"""gcsst: transmute CSS classes into Grimoire CSS spells."""

__version__ = "0.9.0"

from gcsst.config import TransmuteConfig  # noqa: E402
from gcsst.errors import InputError, ParseError, SerializationError, TransmuteError  # noqa: E402
from gcsst.model import (  # noqa: E402
    ClassEntry,
    Declaration,
    MediaQuery,
    PseudoState,
    StyleRule,
    TransmuteResult,
)
from gcsst.transmute import expand_paths, transmute, transmute_content, transmute_paths  # noqa: E402

__all__ = [
    "__version__",
    "TransmuteConfig",
    "TransmuteError",
    "ParseError",
    "InputError",
    "SerializationError",
    "ClassEntry",
    "Declaration",
    "MediaQuery",
    "PseudoState",
    "StyleRule",
    "TransmuteResult",
    "expand_paths",
    "transmute",
    "transmute_content",
    "transmute_paths",
]
