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

"""Shared fixtures: a small listed-license registry and a fresh document."""

from __future__ import annotations

import pytest
from spdxlicense.config import ParserConfig
from spdxlicense.model import LicenseException, ListedLicense
from spdxlicense.registry import ListedLicenseRegistry, SpdxDocumentContainer

LISTED_LICENSES = (
    ListedLicense(
        'MIT',
        name='MIT License',
        text='Permission is hereby granted, free of charge, to any person obtaining a copy',
        source_urls=('https://opensource.org/licenses/MIT',),
        osi_approved=True,
        fsf_libre=True,
    ),
    ListedLicense(
        'Apache-2.0',
        name='Apache License 2.0',
        text='Apache License Version 2.0, January 2004',
        source_urls=('https://www.apache.org/licenses/LICENSE-2.0',),
        osi_approved=True,
    ),
    ListedLicense('AFL-3.0', name='Academic Free License v3.0', text='Academic Free License ("AFL") v. 3.0'),
    ListedLicense('BSD-3-Clause', name='BSD 3-Clause "New" or "Revised" License', text='Redistribution and use'),
    ListedLicense('GPL-2.0', name='GNU General Public License v2.0', text='GNU GENERAL PUBLIC LICENSE', deprecated=True),
    ListedLicense('LGPL-2.1-only', name='GNU Lesser General Public License v2.1 only', text='GNU LESSER GENERAL'),
)

LISTED_EXCEPTIONS = (
    LicenseException('Autoconf-exception-2.0', name='Autoconf exception 2.0', text='As a special exception'),
    LicenseException('Classpath-exception-2.0', name='Classpath exception 2.0', text='Linking this library'),
    LicenseException('LLVM-exception', name='LLVM Exception', text='As an exception, if you use this Software'),
)


@pytest.fixture()
def registry() -> ListedLicenseRegistry:
    """Registry with a handful of listed licenses and exceptions."""
    return ListedLicenseRegistry(licenses=LISTED_LICENSES, exceptions=LISTED_EXCEPTIONS)


@pytest.fixture()
def config(registry: ListedLicenseRegistry) -> ParserConfig:
    """Parser config backed by the sample registry."""
    return ParserConfig(registry=registry)


@pytest.fixture()
def doc() -> SpdxDocumentContainer:
    """A fresh, empty document container."""
    return SpdxDocumentContainer()
