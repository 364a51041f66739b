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

r"""License expression AST.

Every value produced by :func:`spdxlicense.parser.parse` is a
:class:`LicenseExpression`. The concrete node types are::

    LicenseExpression
    ├── SimpleLicense            identity = id string
    │   ├── ListedLicense        registry-backed, full metadata
    │   └── ExtractedLicense     document-local LicenseRef-*
    ├── OrLater                  SimpleLicense "+"
    ├── WithException           (SimpleLicense | OrLater) WITH LicenseException
    ├── LicenseSet               >= 2 members
    │   ├── ConjunctiveSet       AND
    │   └── DisjunctiveSet       OR
    ├── NoneLicense              "NONE" (singleton NONE_LICENSE)
    └── NoAssertionLicense       "NOASSERTION" (singleton NOASSERTION_LICENSE)

Key Concepts (ELI5)::

    ┌─────────────────────┬──────────────────────────────────────────────┐
    │ Concept              │ Plain-English                                │
    ├─────────────────────┼──────────────────────────────────────────────┤
    │ == (equals)          │ "Same license statement." Atomic licenses   │
    │                      │ compare by id only; sets compare members as │
    │                      │ a multiset, ignoring order.                  │
    ├─────────────────────┼──────────────────────────────────────────────┤
    │ equivalent()         │ "Same statement AND same content." Also     │
    │                      │ compares text, name, comment and URLs, so a │
    │                      │ LicenseRef whose text was edited is equal   │
    │                      │ but not equivalent.                          │
    ├─────────────────────┼──────────────────────────────────────────────┤
    │ render()             │ Canonical expression string. Parsing the    │
    │                      │ result gives back an equal tree.             │
    ├─────────────────────┼──────────────────────────────────────────────┤
    │ verify()             │ Warnings about content (missing text, bad   │
    │                      │ LicenseRef id, deprecated ids). Never used  │
    │                      │ by the parser.                               │
    └─────────────────────┴──────────────────────────────────────────────┘

Nodes are immutable once built.

Usage::

    from spdxlicense.model import ConjunctiveSet, DisjunctiveSet, ExtractedLicense, ListedLicense

    mit = ListedLicense('MIT', name='MIT License')
    ref = ExtractedLicense('LicenseRef-1', text='Custom terms')
    expr = ConjunctiveSet(DisjunctiveSet(mit, ListedLicense('Apache-2.0')), ref)
    assert expr.render() == '(MIT OR Apache-2.0) AND LicenseRef-1'
"""

from __future__ import annotations

import abc
import re
from collections import Counter
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import ClassVar, cast

from spdxlicense._text import is_license_text_equivalent
from spdxlicense.lexer import is_identifier

__all__ = [
    'LICENSE_REF_PREFIX',
    'NOASSERTION_LICENSE',
    'NOASSERTION_VALUE',
    'NONE_LICENSE',
    'NONE_VALUE',
    'ConjunctiveSet',
    'DisjunctiveSet',
    'ExtractedLicense',
    'LicenseException',
    'LicenseExpression',
    'LicenseSet',
    'ListedLicense',
    'NoAssertionLicense',
    'NoneLicense',
    'OrLater',
    'SimpleLicense',
    'WithException',
    'license_ids',
    'simple_licenses',
]

NONE_VALUE = 'NONE'
NOASSERTION_VALUE = 'NOASSERTION'
LICENSE_REF_PREFIX = 'LicenseRef-'

_LICENSE_REF_RE = re.compile(r'LicenseRef-[0-9a-zA-Z.\-]+(?:\+[0-9a-zA-Z.\-]+)*')


class LicenseExpression(abc.ABC):
    """Base type of every license expression node."""

    __slots__ = ()

    @abc.abstractmethod
    def render(self) -> str:
        """Return the canonical expression string for this node."""

    @abc.abstractmethod
    def equivalent(self, other: object) -> bool:
        """Return whether *other* is equal and carries the same content."""

    @abc.abstractmethod
    def verify(self) -> list[str]:
        """Return human-readable verification warnings (empty if clean)."""

    def __str__(self) -> str:
        """Return the canonical expression string."""
        return self.render()


# ---------------------------------------------------------------------------
# Atomic licenses
# ---------------------------------------------------------------------------


def _same_urls(a: tuple[str, ...], b: tuple[str, ...]) -> bool:
    return frozenset(a) == frozenset(b)


def _check_id(kind: str, value: str) -> None:
    """Reject ids that would not read back as the same single identifier."""
    if value in (NONE_VALUE, NOASSERTION_VALUE) or not is_identifier(value):
        raise ValueError(
            f'invalid {kind} id {value!r}: must be non-empty, not a reserved word, '
            'and free of whitespace, parentheses and leading or trailing "+"'
        )


@dataclass(frozen=True, eq=False)
class SimpleLicense(LicenseExpression):
    """A license identified by its id alone.

    Two simple licenses are equal iff their ids are equal, whatever
    their concrete type or metadata.

    Attributes:
        id: The license identifier (e.g. ``"MIT"``, ``"LicenseRef-1"``).

    Raises:
        ValueError: If *id* is empty, ``NONE``, ``NOASSERTION`` or an
            operator keyword, or is not a single expression identifier.
    """

    id: str

    def __post_init__(self) -> None:
        _check_id('license', self.id)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SimpleLicense):
            return self.id == other.id
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.id)

    def render(self) -> str:
        """Return the license id."""
        return self.id

    def equivalent(self, other: object) -> bool:
        """Compare id, name, text, comment and source URLs."""
        if type(other) is not type(self) or not isinstance(other, SimpleLicense):
            return False
        return (
            self.id == other.id
            and getattr(self, 'name', '') == getattr(other, 'name', '')
            and getattr(self, 'comment', '') == getattr(other, 'comment', '')
            and _same_urls(getattr(self, 'source_urls', ()), getattr(other, 'source_urls', ()))
            and is_license_text_equivalent(getattr(self, 'text', ''), getattr(other, 'text', ''))
        )

    def verify(self) -> list[str]:
        """Nothing to check beyond the id, which construction validates."""
        return []


@dataclass(frozen=True, eq=False)
class ListedLicense(SimpleLicense):
    """A license from the listed-license registry.

    Attributes:
        name: Full human-readable name.
        text: Canonical license text.
        source_urls: URLs where the license text is published.
        comment: Free-form notes.
        standard_license_header: Header text to place in source files.
        standard_license_template: Matching template for the text.
        osi_approved: Whether OSI has approved this license.
        fsf_libre: Whether the FSF considers this license free.
        deprecated: Whether the id is deprecated in the registry.
    """

    name: str = ''
    text: str = ''
    source_urls: tuple[str, ...] = ()
    comment: str = ''
    standard_license_header: str = ''
    standard_license_template: str = ''
    osi_approved: bool = False
    fsf_libre: bool = False
    deprecated: bool = False

    def verify(self) -> list[str]:
        """Report missing name/text and deprecation."""
        warnings = super().verify()
        if not self.name:
            warnings.append(f'Missing required license name for {self.id}')
        if not self.text.strip():
            warnings.append(f'Missing required license text for {self.id}')
        if self.deprecated:
            warnings.append(f'{self.id} is deprecated.')
        return warnings


@dataclass(frozen=True, eq=False)
class ExtractedLicense(SimpleLicense):
    """A non-standard license local to one document (``LicenseRef-*``).

    Attributes:
        text: The license text as found in the package or file.
        name: Optional human-readable name.
        comment: Optional free-form notes.
        source_urls: Optional URLs where the text was found.
    """

    text: str = ''
    name: str = ''
    comment: str = ''
    source_urls: tuple[str, ...] = ()

    def verify(self) -> list[str]:
        """Report a malformed ``LicenseRef-`` id and missing text."""
        if not _LICENSE_REF_RE.fullmatch(self.id):
            warnings = [
                f"Invalid license id '{self.id}'. Must start with '{LICENSE_REF_PREFIX}' and be made up of "
                "the characters 'a'-'z', 'A'-'Z', '0'-'9', '+', '.' and '-', with '+' only between other characters."
            ]
        else:
            warnings = []
        if not self.text.strip():
            warnings.append(f'Missing required license text for {self.id}')
        return warnings


@dataclass(frozen=True)
class NoneLicense(LicenseExpression):
    """Explicit statement that no license applies (``NONE``).

    Construction always returns the shared :data:`NONE_LICENSE`.
    """

    _instance: ClassVar[NoneLicense | None] = None

    def __new__(cls) -> NoneLicense:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def render(self) -> str:
        """Return ``NONE``."""
        return NONE_VALUE

    def equivalent(self, other: object) -> bool:
        """Equivalent to any other ``NONE``."""
        return self == other

    def verify(self) -> list[str]:
        """Always clean."""
        return []


@dataclass(frozen=True)
class NoAssertionLicense(LicenseExpression):
    """No claim is made about the license (``NOASSERTION``).

    Construction always returns the shared :data:`NOASSERTION_LICENSE`.
    """

    _instance: ClassVar[NoAssertionLicense | None] = None

    def __new__(cls) -> NoAssertionLicense:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def render(self) -> str:
        """Return ``NOASSERTION``."""
        return NOASSERTION_VALUE

    def equivalent(self, other: object) -> bool:
        """Equivalent to any other ``NOASSERTION``."""
        return self == other

    def verify(self) -> list[str]:
        """Always clean."""
        return []


NONE_LICENSE = NoneLicense()
NOASSERTION_LICENSE = NoAssertionLicense()


# ---------------------------------------------------------------------------
# Exceptions and unary operators
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LicenseException:
    """A named exception attachable with ``WITH``.

    Equality uses the id only.

    Attributes:
        id: The exception identifier (e.g. ``"Classpath-exception-2.0"``).
        name: Full human-readable name.
        text: Exception text.
        source_urls: URLs where the exception is published.
        comment: Free-form notes.
        example: Example of how the exception is applied.
        deprecated: Whether the id is deprecated in the registry.
    """

    id: str
    name: str = field(default='', compare=False)
    text: str = field(default='', compare=False)
    source_urls: tuple[str, ...] = field(default=(), compare=False)
    comment: str = field(default='', compare=False)
    example: str = field(default='', compare=False)
    deprecated: bool = field(default=False, compare=False)

    def __post_init__(self) -> None:
        _check_id('exception', self.id)

    def __str__(self) -> str:
        """Return the exception id."""
        return self.id

    def equivalent(self, other: object) -> bool:
        """Compare id, name, text, comment, example and source URLs."""
        if not isinstance(other, LicenseException):
            return False
        return (
            self.id == other.id
            and self.name == other.name
            and self.comment == other.comment
            and self.example == other.example
            and _same_urls(self.source_urls, other.source_urls)
            and is_license_text_equivalent(self.text, other.text)
        )

    def verify(self) -> list[str]:
        """Report missing text and deprecation."""
        warnings: list[str] = []
        if not self.text.strip():
            warnings.append(f'Missing required license exception text for {self.id}')
        if self.deprecated:
            warnings.append(f'{self.id} is deprecated.')
        return warnings


@dataclass(frozen=True)
class OrLater(LicenseExpression):
    """``license+``: this version of the license or any later one.

    Attributes:
        license: The wrapped simple license.
    """

    license: SimpleLicense

    def __post_init__(self) -> None:
        if not isinstance(self.license, SimpleLicense):
            raise TypeError(f'OrLater requires a SimpleLicense, got {type(self.license).__name__}')

    def render(self) -> str:
        """Return ``id+``."""
        return f'{self.license.render()}+'

    def equivalent(self, other: object) -> bool:
        """Compare the wrapped licenses with :meth:`SimpleLicense.equivalent`."""
        return isinstance(other, OrLater) and self.license.equivalent(other.license)

    def verify(self) -> list[str]:
        """Verify the wrapped license."""
        return self.license.verify()


@dataclass(frozen=True)
class WithException(LicenseExpression):
    """``license WITH exception``.

    Attributes:
        license: The base license, possibly or-later.
        exception: The attached exception.
    """

    license: SimpleLicense | OrLater
    exception: LicenseException

    def __post_init__(self) -> None:
        if not isinstance(self.license, (SimpleLicense, OrLater)):
            raise TypeError(
                f'WithException requires a SimpleLicense or OrLater license, got {type(self.license).__name__}'
            )
        if not isinstance(self.exception, LicenseException):
            raise TypeError(f'WithException requires a LicenseException, got {type(self.exception).__name__}')

    def render(self) -> str:
        """Return ``license WITH exception``."""
        return f'{self.license.render()} WITH {self.exception.id}'

    def equivalent(self, other: object) -> bool:
        """Compare both license and exception content."""
        return (
            isinstance(other, WithException)
            and self.license.equivalent(other.license)
            and self.exception.equivalent(other.exception)
        )

    def verify(self) -> list[str]:
        """Verify the license, then the exception."""
        return [*self.license.verify(), *self.exception.verify()]


# ---------------------------------------------------------------------------
# N-ary sets
# ---------------------------------------------------------------------------


class LicenseSet(LicenseExpression):
    """Common behavior of :class:`ConjunctiveSet` and :class:`DisjunctiveSet`.

    Members keep their construction order for rendering. Equality is
    multiset equality over the members after nested sets of the same
    kind are flattened, so ``AND(A, AND(B, C)) == AND(A, B, C)`` and
    ``AND(A, A, B) != AND(A, B)``.
    """

    __slots__ = ('_members',)

    operator: ClassVar[str] = ''

    def __init__(self, *members: LicenseExpression) -> None:
        if len(members) < 2:
            raise ValueError(f'{type(self).__name__} requires at least 2 members, got {len(members)}')
        for member in members:
            if not isinstance(member, LicenseExpression):
                raise TypeError(f'{type(self).__name__} member must be a LicenseExpression, got {type(member).__name__}')
        object.__setattr__(self, '_members', tuple(members))

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f'{type(self).__name__} is immutable')

    @property
    def members(self) -> tuple[LicenseExpression, ...]:
        """The members in construction order."""
        return self._members

    def flattened_members(self) -> tuple[LicenseExpression, ...]:
        """Return members with nested sets of the same kind expanded in place."""
        return tuple(self._iter_flattened())

    def _iter_flattened(self) -> Iterator[LicenseExpression]:
        for member in self._members:
            if type(member) is type(self):
                yield from member._iter_flattened()  # type: ignore[attr-defined]
            else:
                yield member

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return Counter(self._iter_flattened()) == Counter(cast(LicenseSet, other)._iter_flattened())

    def __hash__(self) -> int:
        return hash((self.operator, frozenset(Counter(self._iter_flattened()).items())))

    def __repr__(self) -> str:
        return f'{type(self).__name__}({", ".join(repr(m) for m in self._members)})'

    def render(self) -> str:
        """Join members with the operator, parenthesizing sets of the other kind."""
        return f' {self.operator} '.join(self._render_member(m) for m in self._members)

    def _render_member(self, member: LicenseExpression) -> str:
        if isinstance(member, LicenseSet) and type(member) is not type(self):
            return f'({member.render()})'
        return member.render()

    def equivalent(self, other: object) -> bool:
        """Match every flattened member to a distinct equivalent member of *other*."""
        if type(other) is not type(self):
            return False
        mine = self.flattened_members()
        unmatched = list(cast(LicenseSet, other).flattened_members())
        if len(mine) != len(unmatched):
            return False
        for member in mine:
            for i, candidate in enumerate(unmatched):
                if member.equivalent(candidate):
                    del unmatched[i]
                    break
            else:
                return False
        return True

    def verify(self) -> list[str]:
        """Concatenate the warnings of all members."""
        warnings: list[str] = []
        for member in self._members:
            warnings.extend(member.verify())
        return warnings


class ConjunctiveSet(LicenseSet):
    """All members apply (``AND``)."""

    __slots__ = ()

    operator = 'AND'


class DisjunctiveSet(LicenseSet):
    """Any one member applies (``OR``)."""

    __slots__ = ()

    operator = 'OR'


# ---------------------------------------------------------------------------
# Traversal helpers
# ---------------------------------------------------------------------------


def simple_licenses(node: LicenseExpression) -> list[SimpleLicense]:
    """Collect the distinct simple licenses referenced by an expression.

    ``+`` and ``WITH`` wrappers are looked through; exceptions are not
    included. Order is first appearance in rendering order.

    Args:
        node: The root of a license expression.

    Returns:
        A list of :class:`SimpleLicense` values without duplicates.
    """
    seen: dict[SimpleLicense, None] = {}
    _collect(node, seen)
    return list(seen)


def _collect(node: LicenseExpression, acc: dict[SimpleLicense, None]) -> None:
    """Recursively collect simple licenses into *acc*."""
    if isinstance(node, SimpleLicense):
        acc.setdefault(node, None)
    elif isinstance(node, OrLater):
        acc.setdefault(node.license, None)
    elif isinstance(node, WithException):
        _collect(node.license, acc)
    elif isinstance(node, LicenseSet):
        for member in node.members:
            _collect(member, acc)


def license_ids(node: LicenseExpression) -> set[str]:
    """Return the ids of all simple licenses referenced by an expression.

    Examples::

        >>> sorted(license_ids(OrLater(ListedLicense('GPL-2.0'))))
        ['GPL-2.0']
    """
    return {lic.id for lic in simple_licenses(node)}
