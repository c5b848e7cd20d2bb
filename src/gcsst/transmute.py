"""Transmutation pipeline: CSS text in, spell JSON out.

Parsing -> classifying/generating -> aggregating -> (oneliner) -> serializing.
Every call builds its own parser and aggregator, so calls share no state.
"""

from __future__ import annotations

import glob
import logging
import os
import time
from pathlib import Path
from typing import Sequence

from gcsst.aggregate import Aggregator
from gcsst.classifier import classify
from gcsst.config import TransmuteConfig
from gcsst.errors import InputError, ParseError
from gcsst.model import ClassEntry, StyleRule, TransmuteResult
from gcsst.oneliner import build_oneliner
from gcsst.parser import StylesheetParser
from gcsst.serialize import serialize
from gcsst.spells import generate

__all__ = ["expand_paths", "transmute", "transmute_content", "transmute_paths"]

logger = logging.getLogger(__name__)


def _build_entries(
    rules: Sequence[StyleRule], parser: StylesheetParser, config: TransmuteConfig
) -> list[ClassEntry]:
    aggregator = Aggregator()
    for rule in rules:
        for name, contexts in classify(rule, parser.selectors):
            aggregator.add_rule(name, rule)
            for decl in rule.declarations:
                aggregator.add(name, generate(decl.property, decl.value, contexts, config.syntax))
    return aggregator.entries(build_oneliner if config.with_oneliner else None)


def transmute(css: str, config: TransmuteConfig | None = None) -> TransmuteResult:
    """Transmute CSS text into ordered class entries.  Raises ParseError."""
    config = config or TransmuteConfig()
    start = time.perf_counter()
    parser = StylesheetParser()
    entries = _build_entries(parser.parse(css), parser, config)
    duration = time.perf_counter() - start
    logger.info("Transmuted %d classes in %.4fs", len(entries), duration)
    return TransmuteResult(classes=entries, duration=duration)


def transmute_content(
    css: str, with_oneliner: bool = False, config: TransmuteConfig | None = None
) -> tuple[float, str]:
    """Transmute inline CSS.  Returns ``(duration_seconds, json_text)``."""
    config = config or TransmuteConfig(with_oneliner=with_oneliner)
    start = time.perf_counter()
    result = transmute(css, config)
    json_text = serialize(result.classes, config.with_oneliner, config.indent)
    return time.perf_counter() - start, json_text


def expand_paths(patterns: Sequence[str], cwd: str | Path | None = None) -> list[Path]:
    """Resolve file paths and glob patterns (``**`` is recursive) relative to *cwd*.

    Directories are skipped and duplicates dropped; order follows the
    patterns, then sorted matches within each pattern.
    """
    base = Path(cwd) if cwd is not None else Path.cwd()
    cleaned = [p.strip() for p in patterns if p and p.strip()]
    if not cleaned:
        raise InputError("No CSS file patterns provided.")

    found: dict[Path, None] = {}
    for pattern in cleaned:
        absolute = pattern if os.path.isabs(pattern) else str(base / pattern)
        files = [Path(m) for m in sorted(glob.glob(absolute, recursive=True)) if os.path.isfile(m)]
        if not files:
            raise InputError(f"No files found matching {pattern!r}.")
        for path in files:
            found.setdefault(path, None)
    return list(found)


def _read(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InputError(f"Failed to read '{path}': {e}") from e


def transmute_paths(
    patterns: Sequence[str],
    with_oneliner: bool = False,
    cwd: str | Path | None = None,
    config: TransmuteConfig | None = None,
) -> tuple[float, str]:
    """Transmute every file matched by *patterns* into one JSON document.

    Files are parsed one by one; a ParseError names the offending file and
    aborts the run.  Returns ``(duration_seconds, json_text)``.
    """
    config = config or TransmuteConfig(with_oneliner=with_oneliner)
    paths = expand_paths(patterns, cwd)

    start = time.perf_counter()
    parser = StylesheetParser()
    rules: list[StyleRule] = []
    for path in paths:
        logger.debug("Parsing %s", path)
        try:
            rules.extend(parser.parse(_read(path)))
        except ParseError as e:
            raise e.with_source(str(path)) from e

    entries = _build_entries(rules, parser, config)
    json_text = serialize(entries, config.with_oneliner, config.indent)
    duration = time.perf_counter() - start
    logger.info("Transmuted %d classes from %d files in %.4fs", len(entries), len(paths), duration)
    return duration, json_text
