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

r"""Resolve license and exception identifiers to model values.

License ids go through an ordered chain; the first stage that returns
a value wins:

    1. **Reserved**: ``NONE`` / ``NOASSERTION`` map to the singletons.
    2. **Listed**: registry lookup (case-insensitive, read-only).
    3. **Non-standard**: the document's extracted license with that
       id, created empty and registered on first sight. Always matches.

Exception ids only have the listed stage; an unknown exception raises
:class:`~spdxlicense.errors.UnknownException`.

Registration is the only side effect, and it is idempotent: resolving
``LicenseRef-1`` twice against the same container returns the same
:class:`ExtractedLicense` instance and leaves one entry.

No validation of id shape happens here. A malformed ``LicenseRef``
becomes a verification warning (see :meth:`ExtractedLicense.verify`),
not a parse error.

Usage::

    from spdxlicense.registry import ListedLicenseRegistry, SpdxDocumentContainer
    from spdxlicense.resolver import LicenseResolver

    resolver = LicenseResolver(ListedLicenseRegistry(licenses=[...]))
    doc = SpdxDocumentContainer()
    resolver.resolve_license('MIT', doc)           # ListedLicense
    resolver.resolve_license('LicenseRef-1', doc)  # ExtractedLicense, now in doc
"""

from __future__ import annotations

from collections.abc import Callable

from spdxlicense.errors import UnknownException
from spdxlicense.logging import get_logger
from spdxlicense.model import (
    NOASSERTION_LICENSE,
    NOASSERTION_VALUE,
    NONE_LICENSE,
    NONE_VALUE,
    ExtractedLicense,
    LicenseException,
    ListedLicense,
    NoAssertionLicense,
    NoneLicense,
    SimpleLicense,
)
from spdxlicense.registry import DocumentContainer, LicenseRegistry

__all__ = [
    'LicenseResolver',
    'ResolvedLicense',
]

log = get_logger('spdxlicense.resolver')

#: What a license id can resolve to.
ResolvedLicense = SimpleLicense | NoneLicense | NoAssertionLicense

_RESERVED: dict[str, NoneLicense | NoAssertionLicense] = {
    NONE_VALUE: NONE_LICENSE,
    NOASSERTION_VALUE: NOASSERTION_LICENSE,
}


class LicenseResolver:
    """Turns identifiers into model values using a registry.

    Args:
        registry: The listed-license registry to consult.
    """

    def __init__(self, registry: LicenseRegistry) -> None:
        self._registry = registry
        self._stages: tuple[Callable[[str], ResolvedLicense | None], ...] = (
            self._match_reserved,
            self._match_listed,
        )

    @property
    def registry(self) -> LicenseRegistry:
        """The registry consulted by this resolver."""
        return self._registry

    def resolve_license(self, license_id: str, container: DocumentContainer | None) -> ResolvedLicense:
        """Resolve a license id.

        Args:
            license_id: The id as written in the expression.
            container: Document whose extracted licenses are searched
                and extended. With ``None``, an unregistered
                :class:`ExtractedLicense` is returned for unknown ids.

        Returns:
            ``NONE_LICENSE``/``NOASSERTION_LICENSE`` for reserved words,
            otherwise a :class:`ListedLicense` or :class:`ExtractedLicense`.
        """
        for stage in self._stages:
            result = stage(license_id)
            if result is not None:
                return result
        return self._non_standard(license_id, container)

    def resolve_exception(self, exception_id: str) -> LicenseException:
        """Resolve an exception id against the registry.

        Raises:
            UnknownException: If the registry does not list *exception_id*.
        """
        exc = self._registry.lookup_exception(exception_id)
        if exc is None:
            log.debug('exception_unknown', exception_id=exception_id)
            raise UnknownException(exception_id)
        return exc

    @staticmethod
    def _match_reserved(license_id: str) -> NoneLicense | NoAssertionLicense | None:
        return _RESERVED.get(license_id)

    def _match_listed(self, license_id: str) -> ListedLicense | None:
        return self._registry.lookup_license(license_id)

    @staticmethod
    def _non_standard(license_id: str, container: DocumentContainer | None) -> ExtractedLicense:
        if container is None:
            return ExtractedLicense(license_id)
        if container.has_extracted_license(license_id):
            return container.get_extracted_license(license_id)
        lic = ExtractedLicense(license_id)
        container.add_extracted_license(lic)
        log.debug('extracted_license_registered', license_id=license_id)
        return lic
