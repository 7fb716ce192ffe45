"""Grammar data model and reusable rule fragments.

A grammar is plain immutable data: keyword sets per category plus an
ordered tuple of token rules. Rule order is priority, so rules and their
nested ``contains`` are always tuples, never sets or mappings.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from shadergrammar.tokens import TokenCategory


# Score 0 in sets without an explicit relevance
COMMON_KEYWORDS = frozenset(
    {"of", "and", "for", "in", "not", "or", "if", "then", "parent", "list", "value"}
)


@dataclass(frozen=True, slots=True)
class KeywordSet:
    """Case-sensitive identifiers classified as one category.

    ``relevance=None`` scores each hit 1, except for ``COMMON_KEYWORDS``
    which score 0. An explicit relevance applies to every word.
    """

    category: TokenCategory
    words: frozenset[str]
    relevance: int | None = None

    @classmethod
    def from_words(
        cls, category: TokenCategory, text: str, relevance: int | None = None
    ) -> KeywordSet:
        """Build a set from a whitespace-separated word list."""
        return cls(category, frozenset(text.split()), relevance)

    def score(self, word: str) -> int:
        """Relevance of one hit on *word*."""
        if self.relevance is not None:
            return self.relevance
        return 0 if word.lower() in COMMON_KEYWORDS else 1

    def __contains__(self, word: object) -> bool:
        return word in self.words

    def __len__(self) -> int:
        return len(self.words)


@dataclass(frozen=True, slots=True)
class TokenRule:
    """One matching pattern, optionally opening a region with nested rules.

    Without ``end`` the rule classifies a single ``begin`` match. With
    ``end`` it opens a region that lasts until ``end`` matches; inside it
    ``contains`` are tried in order and ``keywords`` classify bare words.
    ``illegal`` closes (or, in strict mode, rejects) the region when it
    matches before ``end``. ``variants`` are alternative begin patterns,
    tried in order, that share every other attribute.
    """

    begin: str = ""
    end: str | None = None
    category: TokenCategory | None = None
    contains: tuple[TokenRule, ...] = ()
    keywords: tuple[KeywordSet, ...] = ()
    relevance: int = 1
    illegal: str | None = None
    variants: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.begin and not self.variants:
            raise ValueError("token rule needs a begin pattern or variants")

    def expand(self) -> tuple[TokenRule, ...]:
        """Return one rule per variant (or the rule itself when it has none)."""
        if not self.variants:
            return (self,)
        return tuple(replace(self, begin=v, variants=()) for v in self.variants)


@dataclass(frozen=True, slots=True)
class GrammarDefinition:
    """Everything a tokenizer needs to classify one language."""

    name: str
    keywords: tuple[KeywordSet, ...] = ()
    rules: tuple[TokenRule, ...] = ()
    case_insensitive: bool = False
    aliases: tuple[str, ...] = ()
    keyword_pattern: str = r"\w+"

    def keyword_set(self, category: TokenCategory) -> KeywordSet | None:
        """Return the top-level keyword set for *category*, if any."""
        for ks in self.keywords:
            if ks.category == category:
                return ks
        return None


# ---------------------------------------------------------------------------
# Reusable fragments (C-family comments and strings)
# ---------------------------------------------------------------------------

# Where a line ends: before any line terminator, or at end of input
LINE_END = r"(?=[\r\n\u2028\u2029])|\Z"

BACKSLASH_ESCAPE = TokenRule(begin=r"\\[\s\S]", relevance=0)

C_LINE_COMMENT = TokenRule(begin=r"//", end=LINE_END, category=TokenCategory.COMMENT)

C_BLOCK_COMMENT = TokenRule(begin=r"/\*", end=r"\*/", category=TokenCategory.COMMENT)

QUOTE_STRING = TokenRule(
    begin=r'"',
    end=r'"',
    category=TokenCategory.STRING,
    contains=(BACKSLASH_ESCAPE,),
    illegal=r"\n",
)
