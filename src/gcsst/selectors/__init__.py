from gcsst.selectors.parser import (
    SelectorList,
    SelectorParser,
    normalize_prelude,
    parse_selector_list,
    unescape,
)
from gcsst.selectors.model import ComplexSelector, CompoundSelector, SimpleSelector

__all__ = [
    "SelectorList",
    "SelectorParser",
    "normalize_prelude",
    "parse_selector_list",
    "unescape",
    "ComplexSelector",
    "CompoundSelector",
    "SimpleSelector",
]
