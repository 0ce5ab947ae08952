# --- Embedded query literals -------------------------------------------------
"""
Recognizes string literals that look like SQL and pulls a table name out of them.

All of this is plain string matching: a literal "is a query" when it starts
with one of a handful of keywords, and the table is whatever token follows
the keyword that usually precedes it (FROM, INTO, UPDATE).
"""
import re
from typing import Mapping, Optional

from cs_inspector.src.cs_inspector.models.findings import (
    UNKNOWN_TABLE,
    QueryClassification,
    QueryKind,
    VariableReference,
)

QUERY_KEYWORDS = ("SELECT", "INSERT", "UPDATE", "DELETE", "FROM", "WHERE", "INTO", "VALUES", "SET")

# kind -> keyword whose following token names the table
TABLE_KEYWORDS = {
    QueryKind.SELECT: "FROM",
    QueryKind.DELETE: "FROM",
    QueryKind.INSERT: "INTO",
    QueryKind.UPDATE: "UPDATE",
}

STRING_LITERAL_TYPES = ("string_literal", "verbatim_string_literal", "raw_string_literal")


def literal_value(text: str) -> str:
    """
    Strips the quoting from a C# string literal's source text:
    "abc", @"abc", \"\"\"abc\"\"\" and "abc"u8 all give abc.
    """
    value = text
    if value.endswith(("u8", "U8")):
        value = value[:-2]
    if value.startswith("@"):
        value = value[1:]
    quotes = 1 if value.startswith('"') else 0
    if value.startswith('"""'):
        quotes = len(value) - len(value.lstrip('"'))
    if quotes and value.endswith('"' * quotes) and len(value) >= 2 * quotes:
        value = value[quotes:len(value) - quotes]
    return value


def is_query_literal(text: str) -> bool:
    """True iff the text starts (case-insensitively) with one of QUERY_KEYWORDS."""
    return text.upper().startswith(QUERY_KEYWORDS)


def query_kind(text: str) -> Optional[QueryKind]:
    upper = text.upper()
    for kind in QueryKind:
        if upper.startswith(kind.value):
            return kind
    return None


def extract_table(text: str, keyword: str) -> str:
    """
    The first whitespace-separated token after the first occurrence of keyword.

    >>> extract_table("SELECT * FROM Orders WHERE x=1", "FROM")
    'Orders'
    >>> extract_table("DELETE everything", "FROM")
    'Unknown'
    """
    match = re.search(re.escape(keyword), text, re.IGNORECASE)
    if match is None:
        return UNKNOWN_TABLE
    tokens = text[match.end():].split()
    return tokens[0] if tokens else UNKNOWN_TABLE


def referenced_variables(text: str, bindings: Mapping[str, str]) -> tuple[VariableReference, ...]:
    """Tracked variables whose name occurs anywhere in the text, in binding order."""
    return tuple(VariableReference(name, value) for name, value in bindings.items() if name in text)


def classify_query(text: str, bindings: Mapping[str, str]) -> QueryClassification:
    kind = query_kind(text)
    table = extract_table(text, TABLE_KEYWORDS[kind]) if kind else UNKNOWN_TABLE
    return QueryClassification(kind=kind, target_table=table,
                               referenced_variables=referenced_variables(text, bindings))
