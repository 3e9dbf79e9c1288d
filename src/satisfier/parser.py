"""
Formula parser and substitution expander.

This module turns the surface syntax::

    ("a" OR NOT "b") AND ("R" OR "c")

into a list of integer clauses. Names that match a formula in the repository
are expanded recursively, sharing one VariableRegistry across the whole
expansion tree, so the same name always maps to the same variable id.
"""

import logging
import re
from typing import NamedTuple

from satisfier.cnf import Clause, Formula, negate_clauses
from satisfier.storage.base import FormulaRepository
from satisfier.utils.exceptions import (
    ConfigurationError,
    CyclicReferenceError,
    ParseError,
)
from satisfier.variables import VariableRegistry

# Set up logging
logger = logging.getLogger(__name__)

NEGATION_POLICIES = ("flip", "tseitin")

# Keywords are case-insensitive; the symbolic spellings are the ones used by
# formulas stored by earlier versions of the tool.
TOKEN_PATTERN = re.compile(
    r"""
     (?P<ws>\s+)
    |(?P<lparen>\()
    |(?P<rparen>\))
    |(?P<and>/\\|∧|\bAND\b)
    |(?P<or>\\/|∨|\bOR\b)
    |(?P<not>!|~|¬|\bNOT\b)
    |(?P<name>"[^"]*")
    """,
    re.VERBOSE | re.IGNORECASE,
)

PRE_ASSIGNMENT_VALUES = {"true": True, "1": True, "false": False, "0": False}


class Token(NamedTuple):
    kind: str
    value: str
    position: int


class ParsedFormula(NamedTuple):
    """Result of parsing: the expanded clauses and the registry that named them."""

    formula: Formula
    registry: VariableRegistry

    @property
    def names(self) -> dict[int, str]:
        """Reverse map from variable id to original name."""
        return self.registry.reverse_map()


def tokenize(text: str) -> list[Token]:
    """
    Split formula text into tokens, discarding whitespace.

    Args:
        text: Formula text

    Returns:
        List of tokens

    Raises:
        ParseError: On characters that start no token
    """
    tokens = []
    pos = 0
    while pos < len(text):
        match = TOKEN_PATTERN.match(text, pos)
        if match is None:
            if text[pos] == '"':
                raise ParseError("Unterminated quoted name", text, pos)
            raise ParseError(f"Unexpected character {text[pos]!r}", text, pos)

        kind = match.lastgroup
        if kind == "name":
            value = match.group()[1:-1]
            if not value:
                raise ParseError("Empty variable name", text, pos)
            tokens.append(Token(kind, value, pos))
        elif kind != "ws":
            tokens.append(Token(kind, match.group(), pos))
        pos = match.end()
    return tokens


class _TokenStream:
    """Cursor over a token list with one token of lookahead."""

    def __init__(self, text: str, tokens: list[Token]):
        self.text = text
        self.tokens = tokens
        self.index = 0

    def peek(self) -> Token | None:
        if self.index < len(self.tokens):
            return self.tokens[self.index]
        return None

    def accept(self, kind: str) -> Token | None:
        token = self.peek()
        if token is not None and token.kind == kind:
            self.index += 1
            return token
        return None

    def expect(self, kind: str, what: str) -> Token:
        token = self.accept(kind)
        if token is None:
            raise self.error(f"Expected {what}")
        return token

    def error(self, message: str) -> ParseError:
        token = self.peek()
        position = token.position if token is not None else len(self.text)
        found = repr(token.value) if token is not None else "end of input"
        return ParseError(f"{message}, found {found}", self.text, position)


class ExpansionContext:
    """
    State threaded through one top-level parse and all nested expansions.

    Holds the shared registry, the repository used to resolve references, the
    negation policy and the chain of formula names currently being expanded.
    """

    def __init__(
        self,
        repository: FormulaRepository | None = None,
        registry: VariableRegistry | None = None,
        negation_policy: str = "flip",
    ):
        if negation_policy not in NEGATION_POLICIES:
            raise ConfigurationError(
                f"Unknown negation policy: {negation_policy}", "parser.negation_policy"
            )
        self.repository = repository
        self.registry = registry if registry is not None else VariableRegistry()
        self.negation_policy = negation_policy
        self.chain: list[str] = []

    def resolve(self, name: str) -> str | None:
        """Raw text of the stored formula called `name`, or None."""
        if self.repository is None:
            return None
        text, found = self.repository.lookup(name)
        return text if found else None

    def expand(self, text: str) -> Formula:
        """
        Parse `text` and expand every reference in it.

        Args:
            text: Formula text

        Returns:
            List of clauses
        """
        stream = _TokenStream(text, tokenize(text))
        formula: Formula = []
        if stream.peek() is None:
            return formula

        self._expand_clause(stream, formula)
        while stream.accept("and"):
            self._expand_clause(stream, formula)

        if stream.peek() is not None:
            raise stream.error("Expected AND or end of formula")
        return formula

    def expand_reference(self, name: str, text: str) -> Formula:
        """Expand a stored formula, refusing names already on the chain."""
        if name in self.chain:
            raise CyclicReferenceError(name, self.chain)

        logger.debug(f"Expanding reference to '{name}' (depth {len(self.chain)})")
        self.chain.append(name)
        try:
            return self.expand(text)
        except ParseError as e:
            raise ParseError(f"In stored formula '{name}': {e.message}") from e
        finally:
            self.chain.pop()

    def _expand_clause(self, stream: _TokenStream, formula: Formula) -> None:
        stream.expect("lparen", "'('")
        if stream.peek() is not None and stream.peek().kind == "rparen":
            raise stream.error("Empty clause")

        clause: Clause = []
        self._expand_literal(stream, formula, clause)
        while stream.accept("or"):
            self._expand_literal(stream, formula, clause)
        stream.expect("rparen", "OR or ')'")

        # A clause made only of references contributes nothing of its own
        if clause:
            formula.append(clause)

    def _expand_literal(self, stream: _TokenStream, formula: Formula, clause: Clause) -> None:
        negated = stream.accept("not") is not None
        name = stream.expect("name", "quoted name").value

        text = self.resolve(name)
        if text is None:
            var_id = self.registry.intern(name)
            clause.append(-var_id if negated else var_id)
            return

        sub_formula = self.expand_reference(name, text)
        if self.negation_policy == "tseitin":
            clause.append(self._define_reference(name, sub_formula, negated, formula))
        elif negated:
            # Literal-flip: each clause is flipped and conjoined on its own,
            # which is not the negation of a multi-clause formula.
            formula.extend(negate_clauses(sub_formula))
        elif len(sub_formula) == 1:
            clause.extend(sub_formula[0])
        else:
            formula.extend(sub_formula)

    def _define_reference(
        self, name: str, sub_formula: Formula, negated: bool, formula: Formula
    ) -> int:
        """
        Introduce an auxiliary literal r with r -> F (or r -> NOT F).

        Returns:
            The auxiliary literal to place in the enclosing clause
        """
        ref = self.registry.fresh(name if not negated else f"not-{name}")
        if not negated:
            for sub_clause in sub_formula:
                formula.append([-ref] + sub_clause)
            return ref

        # NOT F holds iff some clause of F is false: one selector per clause
        selectors = []
        for sub_clause in sub_formula:
            selector = self.registry.fresh(f"{name}-clause")
            selectors.append(selector)
            for lit in sub_clause:
                formula.append([-selector, -lit])
        formula.append([-ref] + selectors)
        return ref


def parse_formula(
    text: str,
    repository: FormulaRepository | None = None,
    registry: VariableRegistry | None = None,
    name: str | None = None,
    negation_policy: str = "flip",
) -> ParsedFormula:
    """
    Parse formula text into clauses, inlining referenced stored formulas.

    Args:
        text: Formula text
        repository: Repository used to resolve names of stored formulas
        registry: Registry to intern into; a fresh one is created if None
        name: Name the formula is being defined under, if any. It is treated
            as already being expanded, so the text may not refer back to it.
        negation_policy: 'flip' or 'tseitin'

    Returns:
        ParsedFormula with the clauses and the registry

    Raises:
        ParseError: On malformed text, here or in a stored formula
        CyclicReferenceError: If stored formulas reference each other in a cycle
    """
    context = ExpansionContext(repository, registry, negation_policy)
    if name is not None:
        context.chain.append(name)

    formula = context.expand(text)
    logger.debug(
        f"Parsed {len(formula)} clauses over {len(context.registry)} variables"
    )
    return ParsedFormula(formula, context.registry)


def parse_pre_assignments(text: str) -> list[tuple[str, bool]]:
    """
    Parse pre-assignments written as ``R := true, "S" := false``.

    Args:
        text: Comma separated assignments; blank text means none

    Returns:
        List of (variable name, value) pairs in input order

    Raises:
        ParseError: If an entry is not of the form name := value
    """
    pairs = []
    if not text or not text.strip():
        return pairs

    for entry in text.split(","):
        parts = entry.split(":=")
        if len(parts) != 2:
            raise ParseError(f"Invalid assignment {entry.strip()!r}, expected 'Var := Value'")

        var_name = parts[0].strip()
        if len(var_name) >= 2 and var_name[0] == var_name[-1] == '"':
            var_name = var_name[1:-1]
        if not var_name:
            raise ParseError(f"Missing variable name in {entry.strip()!r}")

        raw_value = parts[1].strip().lower()
        if raw_value not in PRE_ASSIGNMENT_VALUES:
            raise ParseError(f"Invalid value {parts[1].strip()!r} for '{var_name}'")
        pairs.append((var_name, PRE_ASSIGNMENT_VALUES[raw_value]))
    return pairs
