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

r"""Collaborators consulted while resolving identifiers.

Two roles::

    ┌─────────────────────────┬──────────────────────────────────────────┐
    │ Role                    │ Responsibility                           │
    ├─────────────────────────┼──────────────────────────────────────────┤
    │ LicenseRegistry         │ Read-only lookup of listed licenses and  │
    │                         │ exceptions by id. Safe to share between  │
    │                         │ threads and documents.                   │
    ├─────────────────────────┼──────────────────────────────────────────┤
    │ DocumentContainer       │ The extracted (LicenseRef-*) licenses of │
    │                         │ one document. Mutated by the resolver;   │
    │                         │ not thread-safe.                         │
    └─────────────────────────┴──────────────────────────────────────────┘

:class:`ListedLicenseRegistry` and :class:`SpdxDocumentContainer` are
the in-memory implementations. Anything satisfying the protocols can
be passed instead (e.g. a persistence-backed container).

Usage::

    from spdxlicense.model import LicenseException, ListedLicense
    from spdxlicense.registry import ListedLicenseRegistry, SpdxDocumentContainer

    registry = ListedLicenseRegistry(
        licenses=[ListedLicense('MIT', name='MIT License')],
        exceptions=[LicenseException('Classpath-exception-2.0')],
    )
    registry.lookup_license('mit')  # ListedLicense(id='MIT', ...)

    doc = SpdxDocumentContainer()
    lic = doc.add_new_extracted_license('Custom terms')
    assert lic.id == 'LicenseRef-1'
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Protocol

from spdxlicense.errors import DuplicateExtractedLicenseId
from spdxlicense.logging import get_logger
from spdxlicense.model import LICENSE_REF_PREFIX, ExtractedLicense, LicenseException, ListedLicense

__all__ = [
    'DocumentContainer',
    'LicenseRegistry',
    'ListedLicenseRegistry',
    'SpdxDocumentContainer',
]

log = get_logger('spdxlicense.registry')

_NUMERIC_REF_RE = re.compile(r'LicenseRef-(\d+)')


class LicenseRegistry(Protocol):
    """Read-only source of listed licenses and exceptions."""

    def lookup_license(self, license_id: str) -> ListedLicense | None:
        """Return the listed license for *license_id*, or ``None``."""  # pragma: no cover
        ...

    def lookup_exception(self, exception_id: str) -> LicenseException | None:
        """Return the listed exception for *exception_id*, or ``None``."""  # pragma: no cover
        ...


class DocumentContainer(Protocol):
    """Per-document store of extracted licenses."""

    def has_extracted_license(self, license_id: str) -> bool:
        """Return whether *license_id* is registered."""  # pragma: no cover
        ...

    def get_extracted_license(self, license_id: str) -> ExtractedLicense:
        """Return the registered license; ``KeyError`` if absent."""  # pragma: no cover
        ...

    def add_extracted_license(self, license: ExtractedLicense) -> None:
        """Register a new extracted license."""  # pragma: no cover
        ...


class ListedLicenseRegistry:
    """In-memory :class:`LicenseRegistry`.

    Ids are matched case-insensitively; lookups return the entry with
    its canonical casing.

    Args:
        licenses: Listed licenses to serve.
        exceptions: Listed exceptions to serve.
    """

    def __init__(
        self,
        licenses: Iterable[ListedLicense] = (),
        exceptions: Iterable[LicenseException] = (),
    ) -> None:
        self._licenses: dict[str, ListedLicense] = {lic.id.lower(): lic for lic in licenses}
        self._exceptions: dict[str, LicenseException] = {exc.id.lower(): exc for exc in exceptions}

    def __len__(self) -> int:
        return len(self._licenses)

    def lookup_license(self, license_id: str) -> ListedLicense | None:
        """Return the listed license for *license_id*, or ``None``."""
        return self._licenses.get(license_id.lower())

    def lookup_exception(self, exception_id: str) -> LicenseException | None:
        """Return the listed exception for *exception_id*, or ``None``."""
        return self._exceptions.get(exception_id.lower())

    def license_ids(self) -> list[str]:
        """Return the canonical ids of all listed licenses, sorted."""
        return sorted(lic.id for lic in self._licenses.values())

    def exception_ids(self) -> list[str]:
        """Return the canonical ids of all listed exceptions, sorted."""
        return sorted(exc.id for exc in self._exceptions.values())


class SpdxDocumentContainer:
    """In-memory :class:`DocumentContainer` for a single document.

    Extracted license ids are unique within a container. Not safe for
    concurrent mutation; use one container per document.

    Args:
        extracted_licenses: Licenses already present in the document.

    Raises:
        DuplicateExtractedLicenseId: If *extracted_licenses* repeats an id.
    """

    def __init__(self, extracted_licenses: Iterable[ExtractedLicense] = ()) -> None:
        self._extracted: dict[str, ExtractedLicense] = {}
        self._next_ref = 1
        for lic in extracted_licenses:
            self.add_extracted_license(lic)

    def __len__(self) -> int:
        return len(self._extracted)

    def __contains__(self, license_id: object) -> bool:
        return license_id in self._extracted

    @property
    def extracted_licenses(self) -> list[ExtractedLicense]:
        """Registered licenses in insertion order."""
        return list(self._extracted.values())

    def has_extracted_license(self, license_id: str) -> bool:
        """Return whether *license_id* is registered."""
        return license_id in self._extracted

    def get_extracted_license(self, license_id: str) -> ExtractedLicense:
        """Return the registered license for *license_id*.

        Raises:
            KeyError: If no such license is registered.
        """
        return self._extracted[license_id]

    def add_extracted_license(self, license: ExtractedLicense) -> None:
        """Register *license*.

        Raises:
            DuplicateExtractedLicenseId: If the id is already registered.
        """
        if license.id in self._extracted:
            raise DuplicateExtractedLicenseId(license.id)
        self._extracted[license.id] = license
        m = _NUMERIC_REF_RE.fullmatch(license.id)
        if m is not None:
            self._next_ref = max(self._next_ref, int(m.group(1)) + 1)
        log.debug('extracted_license_added', license_id=license.id, count=len(self._extracted))

    def next_license_ref(self) -> str:
        """Return the next unused ``LicenseRef-N`` id and reserve it."""
        while f'{LICENSE_REF_PREFIX}{self._next_ref}' in self._extracted:
            self._next_ref += 1
        ref = f'{LICENSE_REF_PREFIX}{self._next_ref}'
        self._next_ref += 1
        return ref

    def add_new_extracted_license(self, text: str, *, name: str = '', comment: str = '') -> ExtractedLicense:
        """Create, register and return an extracted license with a fresh id."""
        lic = ExtractedLicense(self.next_license_ref(), text=text, name=name, comment=comment)
        self.add_extracted_license(lic)
        return lic
