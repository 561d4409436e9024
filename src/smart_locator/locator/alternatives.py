"""
Alternative Selector Generator - Heuristic fallbacks for a broken selector.

Strategies (applied in order, results de-duplicated):
1. ID_TO_CLASS - "#x" becomes ".x"
2. CLASS_TO_ID - ".x" becomes "#x"
3. ANCESTOR_PREFIX - scope the selector under common form containers
4. TEXT_MATCH - fixed application texts as text= selectors
5. POSITIONAL - first/last child variants of the selector
6. ROLE - fixed accessibility roles
7. ATTRIBUTE - common input type attributes

Only the id/class strategies depend on the selector's shape; the rest
always contribute, so an unusual selector still gets candidates.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Sequence


class SelectorStrategy(Enum):
    """Which heuristic produced a candidate selector."""
    EXACT = "exact"
    # Stored alternative no current strategy produces
    CACHED = "cached"
    ID_TO_CLASS = "id_to_class"
    CLASS_TO_ID = "class_to_id"
    ANCESTOR_PREFIX = "ancestor_prefix"
    TEXT_MATCH = "text_match"
    POSITIONAL = "positional"
    ROLE = "role"
    ATTRIBUTE = "attribute"


@dataclass(frozen=True)
class Candidate:
    """A selector to probe, tagged with the strategy that produced it."""
    selector: str
    strategy: SelectorStrategy


DEFAULT_ANCESTORS = (".mb-1", ".form-group", ".container")
DEFAULT_TEXTS = ("Invalid username or password!", "Login", "Username", "Password")
DEFAULT_POSITIONS = (":nth-child(1)", ":first-child", ":last-child")
DEFAULT_ROLES = ("button", "textbox", "alert")
DEFAULT_INPUT_TYPES = ("text", "password", "submit")


class AlternativeSelectorGenerator:
    """
    Generate ordered fallback selectors for a primary selector.

    Output depends only on the selector and the constructor arguments.

    Example:
        >>> generator = AlternativeSelectorGenerator()
        >>> generator.generate("#login")[:2]
        ['.login', '.mb-1 #login']
    """

    def __init__(
        self,
        ancestors: Sequence[str] = DEFAULT_ANCESTORS,
        texts: Sequence[str] = DEFAULT_TEXTS,
        positions: Sequence[str] = DEFAULT_POSITIONS,
        roles: Sequence[str] = DEFAULT_ROLES,
        input_types: Sequence[str] = DEFAULT_INPUT_TYPES,
    ):
        self.ancestors = tuple(ancestors)
        self.texts = tuple(texts)
        self.positions = tuple(positions)
        self.roles = tuple(roles)
        self.input_types = tuple(input_types)

        self._strategies: Dict[SelectorStrategy, Callable[[str], List[str]]] = {
            SelectorStrategy.ID_TO_CLASS: self._id_to_class,
            SelectorStrategy.CLASS_TO_ID: self._class_to_id,
            SelectorStrategy.ANCESTOR_PREFIX: self._ancestor_prefix,
            SelectorStrategy.TEXT_MATCH: self._text_match,
            SelectorStrategy.POSITIONAL: self._positional,
            SelectorStrategy.ROLE: self._role,
            SelectorStrategy.ATTRIBUTE: self._attribute,
        }

    @property
    def strategies(self) -> List[SelectorStrategy]:
        """Strategies in application order."""
        return list(self._strategies)

    def generate_candidates(self, selector: str) -> List[Candidate]:
        """
        Generate tagged candidates for a selector.

        The first strategy to produce a selector owns it; later duplicates
        are dropped.

        Args:
            selector: Primary selector

        Returns:
            Ordered, de-duplicated candidates (primary selector excluded)
        """
        seen = {selector}
        candidates: List[Candidate] = []

        for strategy, produce in self._strategies.items():
            for alternative in produce(selector):
                if alternative in seen:
                    continue
                seen.add(alternative)
                candidates.append(Candidate(alternative, strategy))

        return candidates

    def generate(self, selector: str) -> List[str]:
        """Generate ordered alternative selectors for a selector."""
        return [c.selector for c in self.generate_candidates(selector)]

    def tag(self, selector: str, alternatives: Sequence[str]) -> List[Candidate]:
        """
        Tag stored alternatives with the strategy that produces them.

        Alternatives persisted by an older generator, or edited by hand,
        are tagged CACHED.
        """
        owners = {c.selector: c.strategy for c in self.generate_candidates(selector)}
        return [Candidate(a, owners.get(a, SelectorStrategy.CACHED)) for a in alternatives]

    # ------------------------------------------------------------------
    # Strategies
    # ------------------------------------------------------------------

    def _id_to_class(self, selector: str) -> List[str]:
        if selector.startswith("#") and len(selector) > 1:
            return [f".{selector[1:]}"]
        return []

    def _class_to_id(self, selector: str) -> List[str]:
        if selector.startswith(".") and len(selector) > 1:
            return [f"#{selector[1:]}"]
        return []

    def _ancestor_prefix(self, selector: str) -> List[str]:
        return [f"{ancestor} {selector}" for ancestor in self.ancestors]

    def _text_match(self, selector: str) -> List[str]:
        return [f"text={text}" for text in self.texts]

    def _positional(self, selector: str) -> List[str]:
        return [f"{selector}{position}" for position in self.positions]

    def _role(self, selector: str) -> List[str]:
        return [f"role={role}" for role in self.roles]

    def _attribute(self, selector: str) -> List[str]:
        return [f'[type="{input_type}"]' for input_type in self.input_types]
