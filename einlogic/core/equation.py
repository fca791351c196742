"""
Index-equation parser for Einstein summation

Turns strings such as ``'ij,jk->ik'`` or ``'vd,dd_out->vd_out'`` into a
validated IndexEquation. Tokens are opaque labels local to one equation;
they bind to operand axes by position only.

Token rules:
    - When any spec has whitespace between its labels, every spec is split
      on whitespace and every word is one token:
      ``'batch head, head d -> batch d'``.
    - Otherwise each spec is scanned left to right. A token is one letter,
      optional digits, then any number of ``_``-joined suffixes, so ``ij``
      is ``i``, ``j``; ``dd_out`` is ``d``, ``d_out``; ``x1y2`` is ``x1``,
      ``y2``.

Output rules:
    - ``lhs->out``: explicit output, every token must come from the lhs.
    - ``lhs->``: scalar output.
    - ``lhs``: implicit output, the tokens occurring exactly once across all
      operand specs, in order of first appearance.
"""

import re
from collections import Counter
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .exceptions import MalformedEquation, UnknownIndex

ARROW = "->"

_COMPACT_TOKEN = re.compile(r"[A-Za-z][0-9]*(?:_[A-Za-z0-9]+)*")
_WORD_TOKEN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_WORD = re.compile(r"\S+")


@dataclass(frozen=True)
class IndexEquation:
    """Parsed einsum equation: one token tuple per operand plus the output."""
    source: str
    operand_specs: Tuple[Tuple[str, ...], ...]
    output_spec: Tuple[str, ...]
    explicit_output: bool = True
    word_tokens: bool = False

    @property
    def num_operands(self) -> int:
        return len(self.operand_specs)

    @property
    def tokens(self) -> Tuple[str, ...]:
        """Distinct tokens in order of first left-hand-side appearance"""
        return tuple(dict.fromkeys(t for spec in self.operand_specs for t in spec))

    def __str__(self):
        """
        Normalized equation text

        Compactly scanned equations render compactly (``vd,dd_out->vd_out``),
        whitespace-form ones as ``v u, u d -> v d``. A one-word-per-spec
        equation such as ``head, head ->`` has no inner space, so re-parse
        with ``parse_equation(str(eq), word_tokens=eq.word_tokens)``.
        """
        if not self.word_tokens:
            lhs = ",".join("".join(spec) for spec in self.operand_specs)
            return f"{lhs}{ARROW}{''.join(self.output_spec)}"
        return build_equation(self.operand_specs, self.output_spec)


def _has_inner_space(text: str) -> bool:
    return any(ch.isspace() for ch in text.strip())


def _tokenize(text: str, equation: str, offset: int, words: bool) -> Tuple[str, ...]:
    """Tokenize one spec; ``offset`` is its position inside ``equation``."""
    stripped = text.strip()
    lead = len(text) - len(text.lstrip())

    tokens: List[str] = []
    if words:
        for word in _WORD.finditer(text):
            if not _WORD_TOKEN.fullmatch(word.group()):
                raise MalformedEquation(
                    f"Invalid index label '{word.group()}'",
                    equation=equation,
                    column=offset + word.start() + 1,
                )
            tokens.append(word.group())
        return tuple(tokens)

    pos = 0
    while pos < len(stripped):
        match = _COMPACT_TOKEN.match(stripped, pos)
        if match is None:
            raise MalformedEquation(
                f"Unexpected character '{stripped[pos]}'",
                equation=equation,
                column=offset + lead + pos + 1,
            )
        tokens.append(match.group())
        pos = match.end()
    return tuple(tokens)


def implicit_output(operand_specs: Tuple[Tuple[str, ...], ...]) -> Tuple[str, ...]:
    """Tokens that occur exactly once across all specs, first-appearance order."""
    counts = Counter(t for spec in operand_specs for t in spec)
    ordered = dict.fromkeys(t for spec in operand_specs for t in spec)
    return tuple(t for t in ordered if counts[t] == 1)


def parse_equation(equation: str, word_tokens: Optional[bool] = None) -> IndexEquation:
    """
    Parse and validate an einsum equation string

    Args:
        equation: e.g. ``'ij,jk->ik'``, ``'ii->'`` or ``'ij,jk'``
        word_tokens: Force whitespace-separated tokens (True) or compact
            scanning (False); None picks whitespace mode when any spec has
            inner whitespace

    Returns:
        IndexEquation with per-operand and output token tuples

    Raises:
        MalformedEquation: Empty equation, repeated arrow, empty operand spec,
            invalid character, or a token repeated in the output
        UnknownIndex: An output token that no operand spec mentions
    """
    if not isinstance(equation, str):
        raise MalformedEquation(f"Equation must be a string, got {type(equation).__name__}")
    if not equation.strip():
        raise MalformedEquation("Empty equation", equation=equation)

    first_arrow = equation.find(ARROW)
    rhs: Optional[str] = None
    if first_arrow >= 0:
        second_arrow = equation.find(ARROW, first_arrow + len(ARROW))
        if second_arrow >= 0:
            raise MalformedEquation("More than one '->'", equation=equation, column=second_arrow + 1)
        lhs = equation[:first_arrow]
        rhs = equation[first_arrow + len(ARROW):]
    else:
        lhs = equation

    if not lhs.strip():
        raise MalformedEquation("Missing operand specs before '->'", equation=equation, column=1)

    parts = lhs.split(",")
    words = word_tokens
    if words is None:
        words = any(_has_inner_space(p) for p in parts) or (rhs is not None and _has_inner_space(rhs))

    operand_specs = []
    offset = 0
    for part in parts:
        if not part.strip():
            raise MalformedEquation(
                "Empty operand spec (unbalanced commas)",
                equation=equation,
                column=offset + 1,
            )
        operand_specs.append(_tokenize(part, equation, offset, words))
        offset += len(part) + 1
    operand_specs = tuple(operand_specs)

    if rhs is None:
        return IndexEquation(
            source=equation,
            operand_specs=operand_specs,
            output_spec=implicit_output(operand_specs),
            explicit_output=False,
            word_tokens=words,
        )

    output_spec = _tokenize(rhs, equation, first_arrow + len(ARROW), words) if rhs.strip() else ()
    seen = set()
    for token in output_spec:
        if token in seen:
            raise MalformedEquation(f"Output index '{token}' repeated", equation=equation)
        seen.add(token)

    known = {t for spec in operand_specs for t in spec}
    for token in output_spec:
        if token not in known:
            raise UnknownIndex(token, equation=equation)

    return IndexEquation(
        source=equation,
        operand_specs=operand_specs,
        output_spec=output_spec,
        word_tokens=words,
    )


def build_equation(operand_specs, output_spec=None) -> str:
    """
    Render token sequences as a whitespace-form equation string

    ``build_equation([['v', 'u'], ['u', 'd']], ['v', 'd'])`` gives
    ``'v u, u d -> v d'``. Pass ``output_spec=None`` for the implicit form.
    """
    lhs = ", ".join(" ".join(spec) for spec in operand_specs)
    if output_spec is None:
        return lhs
    return f"{lhs} {ARROW} {' '.join(output_spec)}".rstrip()
