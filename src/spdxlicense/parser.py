# Copyright 2026 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0

r"""License expression parser.

Parses expressions such as ``(MIT OR Apache-2.0) AND LicenseRef-1``
into :mod:`spdxlicense.model` trees.

Grammar (precedence loosest to tightest: OR, AND, WITH, +)::

    expression = or_term
    or_term    = and_term ("OR" and_term)*
    and_term   = with_term ("AND" with_term)*
    with_term  = atom ("WITH" IDENTIFIER)?
    atom       = IDENTIFIER "+"?
               / "(" expression ")"

Construction rules:

- Same-level chains are flattened: ``A AND B AND C`` is one
  :class:`ConjunctiveSet` with three members.
- A chain of one is its single child, so ``(A)`` parses like ``A``.
- Mixed levels nest: ``A OR B AND C OR D`` is
  ``DisjunctiveSet(A, ConjunctiveSet(B, C), D)``.
- ``WITH`` binds to the atom on its left only; ``MIT+ WITH X`` is
  ``WithException(OrLater(MIT), X)``.
- ``NONE`` and ``NOASSERTION`` take neither ``+`` nor ``WITH``.

Parsing is all-or-nothing. Extracted licenses first seen during a
parse are registered with the container only when the whole
expression parsed; a failed parse leaves the container untouched.

Usage::

    from spdxlicense.config import ParserConfig
    from spdxlicense.parser import parse
    from spdxlicense.registry import SpdxDocumentContainer

    doc = SpdxDocumentContainer()
    expr = parse('MIT OR LicenseRef-1', doc, config=ParserConfig(registry=registry))
    assert expr.render() == 'MIT OR LicenseRef-1'
    assert doc.has_extracted_license('LicenseRef-1')
"""

from __future__ import annotations

from spdxlicense.config import ParserConfig
from spdxlicense.errors import MalformedExpression
from spdxlicense.lexer import Token, TokenKind, tokenize
from spdxlicense.logging import get_logger
from spdxlicense.model import (
    ConjunctiveSet,
    DisjunctiveSet,
    ExtractedLicense,
    LicenseExpression,
    NoAssertionLicense,
    NoneLicense,
    OrLater,
    SimpleLicense,
    WithException,
)
from spdxlicense.registry import DocumentContainer
from spdxlicense.resolver import LicenseResolver

__all__ = [
    'parse',
]

log = get_logger('spdxlicense.parser')


class _StagedContainer:
    """Buffers new extracted licenses until the parse succeeds."""

    def __init__(self, target: DocumentContainer) -> None:
        self._target = target
        self._staged: dict[str, ExtractedLicense] = {}

    def has_extracted_license(self, license_id: str) -> bool:
        return license_id in self._staged or self._target.has_extracted_license(license_id)

    def get_extracted_license(self, license_id: str) -> ExtractedLicense:
        if license_id in self._staged:
            return self._staged[license_id]
        return self._target.get_extracted_license(license_id)

    def add_extracted_license(self, license: ExtractedLicense) -> None:
        self._staged[license.id] = license

    def commit(self) -> None:
        for lic in self._staged.values():
            self._target.add_extracted_license(lic)
        self._staged.clear()


class _Parser:
    """Recursive descent parser over a token list."""

    def __init__(
        self,
        expr: str,
        tokens: list[Token],
        resolver: LicenseResolver,
        container: DocumentContainer | None,
        max_depth: int,
    ) -> None:
        self._expr = expr
        self._tokens = tokens
        self._resolver = resolver
        self._container = container
        self._max_depth = max_depth
        self._pos = 0
        self._depth = 0

    @property
    def position(self) -> int:
        """Offset of the next unconsumed token."""
        return self._tokens[self._pos].pos

    def _peek(self) -> Token:
        return self._tokens[self._pos]

    def _advance(self) -> Token:
        tok = self._tokens[self._pos]
        self._pos += 1
        return tok

    def _error(self, tok: Token, detail: str) -> MalformedExpression:
        return MalformedExpression(self._expr, tok.pos, detail)

    def _expect(self, kind: TokenKind, what: str) -> Token:
        tok = self._peek()
        if tok.kind is not kind:
            raise self._error(tok, f'expected {what}, got {_describe(tok)}')
        return self._advance()

    def parse(self) -> LicenseExpression:
        if self._peek().kind is TokenKind.EOF:
            raise self._error(self._peek(), 'empty expression')
        node = self._parse_or_term()
        end_tok = self._peek()
        if end_tok.kind is not TokenKind.EOF:
            raise self._error(end_tok, f'unexpected {_describe(end_tok)} after expression')
        return node

    # or_term = and_term ("OR" and_term)*
    def _parse_or_term(self) -> LicenseExpression:
        members = [self._parse_and_term()]
        while self._peek().kind is TokenKind.OR:
            self._advance()
            members.append(self._parse_and_term())
        if len(members) == 1:
            return members[0]
        return DisjunctiveSet(*members)

    # and_term = with_term ("AND" with_term)*
    def _parse_and_term(self) -> LicenseExpression:
        members = [self._parse_with_term()]
        while self._peek().kind is TokenKind.AND:
            self._advance()
            members.append(self._parse_with_term())
        if len(members) == 1:
            return members[0]
        return ConjunctiveSet(*members)

    # with_term = atom ("WITH" IDENTIFIER)?
    def _parse_with_term(self) -> LicenseExpression:
        node = self._parse_atom()
        if self._peek().kind is not TokenKind.WITH:
            return node
        with_tok = self._advance()
        if isinstance(node, (NoneLicense, NoAssertionLicense)):
            raise self._error(with_tok, f'{node.render()} cannot take a WITH clause')
        if not isinstance(node, (SimpleLicense, OrLater)):
            raise self._error(with_tok, 'WITH requires a single license on its left, not a compound expression')
        exc_tok = self._expect(TokenKind.IDENTIFIER, 'exception identifier after WITH')
        exception = self._resolver.resolve_exception(exc_tok.value)
        return WithException(node, exception)

    # atom = IDENTIFIER "+"? / "(" expression ")"
    def _parse_atom(self) -> LicenseExpression:
        tok = self._peek()
        if tok.kind is TokenKind.LPAREN:
            self._advance()
            self._depth += 1
            if self._depth > self._max_depth:
                raise self._error(tok, f'parentheses nested deeper than {self._max_depth} levels')
            node = self._parse_or_term()
            self._expect(TokenKind.RPAREN, '")"')
            self._depth -= 1
            return node
        if tok.kind is TokenKind.IDENTIFIER:
            self._advance()
            lic = self._resolver.resolve_license(tok.value, self._container)
            if self._peek().kind is not TokenKind.PLUS:
                return lic
            plus_tok = self._advance()
            if not isinstance(lic, SimpleLicense):
                raise self._error(plus_tok, f'{lic.render()} cannot take the "+" operator')
            return OrLater(lic)
        raise self._error(tok, f'expected license identifier or "(", got {_describe(tok)}')


def _describe(tok: Token) -> str:
    if tok.kind is TokenKind.EOF:
        return 'end of expression'
    return f'{tok.kind.value} ({tok.value!r})'


def parse(
    expression: str,
    container: DocumentContainer | None = None,
    *,
    config: ParserConfig | None = None,
) -> LicenseExpression:
    """Parse a license expression into a tree.

    Args:
        expression: The expression string
            (e.g. ``"MIT OR Apache-2.0 WITH LLVM-exception"``).
        container: Document whose extracted licenses are reused and
            extended. ``None`` creates unregistered extracted licenses.
        config: Registry and limits. Defaults to :class:`ParserConfig`
            with an empty registry.

    Returns:
        The root :class:`LicenseExpression`.

    Raises:
        MalformedExpression: On any lexical or grammatical error,
            including ``+``/``WITH`` on ``NONE``/``NOASSERTION`` and
            nesting deeper than ``config.max_depth`` or than the
            interpreter stack allows.
        UnknownException: If a ``WITH`` clause names an exception the
            registry does not list.

    Examples::

        >>> parse('AFL-3.0+')
        OrLater(license=ExtractedLicense(id='AFL-3.0', text='', name='', comment='', source_urls=()))

        >>> parse('A OR B AND C').render()
        'A OR (B AND C)'
    """
    config = config or ParserConfig()
    tokens = tokenize(expression)
    staged = _StagedContainer(container) if container is not None else None
    parser = _Parser(expression, tokens, LicenseResolver(config.registry), staged, config.max_depth)
    try:
        result = parser.parse()
    except RecursionError as exc:
        raise MalformedExpression(expression, parser.position, 'expression nested too deeply to parse') from exc
    if staged is not None:
        staged.commit()
    log.debug('expression_parsed', expression=expression, result=result.render())
    return result
