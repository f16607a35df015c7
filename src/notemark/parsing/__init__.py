"""Parsing engine for notemark.

Layers, leaves first:
- brackets: bracket-balanced extraction
- urls: incremental raw URL recognition
- directives: one recognizer per inline construct, tried in priority order
- inline: leftmost-match scanner interleaving text and directives
- blocks: whole-block forms, falling back to the inline scanner
"""

from notemark.parsing.blocks import parse_block
from notemark.parsing.brackets import take_until_unbalanced
from notemark.parsing.directives import match_directive, try_parse_attribute
from notemark.parsing.inline import scan_inline
from notemark.parsing.urls import UrlLocator, try_parse_raw_url

__all__ = [
    "UrlLocator",
    "match_directive",
    "parse_block",
    "scan_inline",
    "take_until_unbalanced",
    "try_parse_attribute",
    "try_parse_raw_url",
]
