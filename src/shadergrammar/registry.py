"""Language registry — name and alias resolution for grammar definitions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from shadergrammar.errors import UnknownLanguageError
from shadergrammar.grammar import GrammarDefinition


@dataclass
class LanguageRegistry:
    """Maps language names (and aliases) to grammar definitions.

    Names are case-insensitive. Registering an existing name overwrites it.
    """

    _languages: dict[str, GrammarDefinition] = field(default_factory=dict, init=False)
    _aliases: dict[str, str] = field(default_factory=dict, init=False)

    def register_language(self, name: str, grammar: GrammarDefinition) -> None:
        """Register *grammar* under *name* and under the grammar's own aliases."""
        key = name.lower()
        self._languages[key] = grammar
        # A real registration shadows a previous alias of the same name
        self._aliases.pop(key, None)
        if grammar.aliases:
            self.register_aliases(grammar.aliases, key)

    def register_aliases(self, aliases: str | Iterable[str], language: str) -> None:
        """Make each alias resolve to *language*."""
        if isinstance(aliases, str):
            aliases = [aliases]
        for alias in aliases:
            self._aliases[alias.lower()] = language.lower()

    def resolve_name(self, name: str) -> str:
        """Resolve an alias to its registered name (identity for unknown names)."""
        key = name.lower()
        return self._aliases.get(key, key)

    def get_language(self, name: str) -> GrammarDefinition:
        """Return the grammar registered under *name* or one of its aliases."""
        key = self.resolve_name(name)
        try:
            return self._languages[key]
        except KeyError:
            raise UnknownLanguageError(name, self.list_languages()) from None

    def list_languages(self) -> list[str]:
        """Registered names, in registration order (aliases excluded)."""
        return list(self._languages)

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        return self.resolve_name(name) in self._languages


def default_registry() -> LanguageRegistry:
    """Return a fresh registry with the bundled grammars registered."""
    from shadergrammar import hlsl

    registry = LanguageRegistry()
    hlsl.register(registry)
    return registry
