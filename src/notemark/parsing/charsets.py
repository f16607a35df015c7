"""Character sets for O(1) classification.

All sets are frozensets for:
- O(1) membership testing (vs O(n) for strings)
- Immutability (thread-safe)
- Module-level caching (no per-call allocation)

Usage:
    from notemark.parsing.charsets import MULTISPACE

    while pos < end and text[pos] in MULTISPACE:
        pos += 1
"""

# Whitespace accepted between directive parts (spaces, tabs, line endings)
MULTISPACE: frozenset[str] = frozenset(" \t\r\n")

# Characters that end a word in addition to whitespace
WORD_TERMINATORS: frozenset[str] = frozenset(",")

# Characters that end a Logseq attribute name in addition to whitespace
LOGSEQ_ATTRIBUTE_TERMINATORS: frozenset[str] = frozenset(",:")

# Characters that end a Roam attribute name
ROAM_ATTRIBUTE_TERMINATORS: frozenset[str] = frozenset(":`")

# First characters of every directive except raw URLs (letters) and
# attributes (anything). The inline scanner skips other positions outright
# when attributes are not allowed.
DIRECTIVE_TRIGGERS: frozenset[str] = frozenset("`{#[(!@*_~^$")

# URL characters that are legal inside a URL but never end one
URL_TRAILING_PUNCTUATION: frozenset[str] = frozenset(".,:;?!([\'")

# Characters that cannot appear in a raw URL at all
URL_ILLEGAL: frozenset[str] = frozenset('<>"`{|}\\^⟨⟩')


def is_word_char(char: str) -> bool:
    """Check if character can be part of a bare word (tag, directive name)."""
    return not char.isspace() and char not in WORD_TERMINATORS


def is_url_control(char: str) -> bool:
    """Check if character is a C0/C1 control character or whitespace."""
    code = ord(char)
    return code <= 0x1F or 0x7F <= code <= 0x9F or char.isspace()
