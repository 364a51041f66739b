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

r"""Tokenizer for license expressions.

Splits an expression into a flat list of :class:`Token` values. The
lexer only partitions the string; it does not check whether an
identifier is a known license, a well-formed ``LicenseRef-``, or an
exception. That is left to the parser and resolver.

Token kinds::

    ┌────────────┬──────────────────────────────────────────────────┐
    │ Kind       │ Matches                                          │
    ├────────────┼──────────────────────────────────────────────────┤
    │ IDENTIFIER │ run of non-space chars other than ( ) and a      │
    │            │ leading/trailing +  (e.g. MIT, LicenseRef-a+b)   │
    │ AND/OR/WITH│ an identifier run that is exactly the keyword    │
    │            │ (case-sensitive; "and" is an identifier)          │
    │ PLUS       │ a + not inside an identifier (GPL-2.0+)           │
    │ LPAREN     │ (                                                │
    │ RPAREN     │ )                                                │
    │ EOF        │ end of input (always the last token)             │
    └────────────┴──────────────────────────────────────────────────┘

Keywords are only recognized as whole runs, so ``ANDROID`` or
``LicenseRef-OR`` stay identifiers. Control characters are rejected
with :class:`~spdxlicense.errors.MalformedExpression`.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass

from spdxlicense.errors import MalformedExpression

__all__ = [
    'KEYWORDS',
    'Token',
    'TokenKind',
    'is_identifier',
    'tokenize',
]


class TokenKind(enum.Enum):
    """Kinds of lexical tokens."""

    IDENTIFIER = 'IDENTIFIER'
    AND = 'AND'
    OR = 'OR'
    WITH = 'WITH'
    PLUS = 'PLUS'
    LPAREN = 'LPAREN'
    RPAREN = 'RPAREN'
    EOF = 'EOF'


#: Identifier runs that are promoted to operator tokens.
KEYWORDS: dict[str, TokenKind] = {
    'AND': TokenKind.AND,
    'OR': TokenKind.OR,
    'WITH': TokenKind.WITH,
}


@dataclass(frozen=True)
class Token:
    """A single lexical token.

    Attributes:
        kind: The token kind.
        value: The exact source text of the token (empty for EOF).
        pos: Character offset of the token in the input.
    """

    kind: TokenKind
    value: str
    pos: int


# An identifier may contain '+' only between two non-'+' characters, so
# that "GPL-2.0+" yields IDENTIFIER PLUS while "LicenseRef-a+b" stays whole.
_WORD_CHARS = r'[^\s()+\x00-\x1f\x7f]'
_WORD = rf'{_WORD_CHARS}+(?:\+{_WORD_CHARS}+)*'

_TOKEN_RE = re.compile(
    rf"""
        (?P<lparen>\()
      | (?P<rparen>\))
      | (?P<plus>\+)
      | (?P<word>{_WORD})
    """,
    re.VERBOSE,
)

_WORD_RE = re.compile(_WORD)

_SINGLE_CHAR_KINDS: dict[str, TokenKind] = {
    'lparen': TokenKind.LPAREN,
    'rparen': TokenKind.RPAREN,
    'plus': TokenKind.PLUS,
}


def is_identifier(text: str) -> bool:
    """Return whether *text* lexes as exactly one ``IDENTIFIER`` token.

    Examples::

        >>> is_identifier('LicenseRef-a+b'), is_identifier('GPL-2.0+'), is_identifier('OR')
        (True, False, False)
    """
    return _WORD_RE.fullmatch(text) is not None and text not in KEYWORDS


def tokenize(expression: str) -> list[Token]:
    """Tokenize a license expression.

    Args:
        expression: The raw expression string.

    Returns:
        The token list, always terminated by a single ``EOF`` token.

    Raises:
        MalformedExpression: If a character that cannot start any token
            (e.g. a control character) is found.

    Examples::

        >>> [t.kind.value for t in tokenize('(MIT OR GPL-2.0+)')]
        ['LPAREN', 'IDENTIFIER', 'OR', 'IDENTIFIER', 'PLUS', 'RPAREN', 'EOF']
    """
    tokens: list[Token] = []
    pos = 0
    end = len(expression)
    while pos < end:
        if expression[pos].isspace():
            pos += 1
            continue
        m = _TOKEN_RE.match(expression, pos)
        if m is None:
            raise MalformedExpression(expression, pos, f'unexpected character {expression[pos]!r}')
        group = m.lastgroup
        text = m.group()
        if group == 'word':
            kind = KEYWORDS.get(text, TokenKind.IDENTIFIER)
        else:
            kind = _SINGLE_CHAR_KINDS[group or '']
        tokens.append(Token(kind, text, pos))
        pos = m.end()
    tokens.append(Token(TokenKind.EOF, '', end))
    return tokens
