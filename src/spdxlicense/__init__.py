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

"""Typed license expressions for software package metadata."""

from spdxlicense.config import ParserConfig, load_config
from spdxlicense.errors import (
    ConfigError,
    DuplicateExtractedLicenseId,
    LicenseExpressionError,
    MalformedExpression,
    UnknownException,
)
from spdxlicense.model import (
    NOASSERTION_LICENSE,
    NONE_LICENSE,
    ConjunctiveSet,
    DisjunctiveSet,
    ExtractedLicense,
    LicenseException,
    LicenseExpression,
    LicenseSet,
    ListedLicense,
    NoAssertionLicense,
    NoneLicense,
    OrLater,
    SimpleLicense,
    WithException,
    license_ids,
    simple_licenses,
)
from spdxlicense.parser import parse
from spdxlicense.registry import ListedLicenseRegistry, SpdxDocumentContainer
from spdxlicense.resolver import LicenseResolver

__all__ = [
    'NOASSERTION_LICENSE',
    'NONE_LICENSE',
    'ConfigError',
    'ConjunctiveSet',
    'DisjunctiveSet',
    'DuplicateExtractedLicenseId',
    'ExtractedLicense',
    'LicenseException',
    'LicenseExpression',
    'LicenseExpressionError',
    'LicenseResolver',
    'LicenseSet',
    'ListedLicense',
    'ListedLicenseRegistry',
    'MalformedExpression',
    'NoAssertionLicense',
    'NoneLicense',
    'OrLater',
    'ParserConfig',
    'SimpleLicense',
    'SpdxDocumentContainer',
    'UnknownException',
    'WithException',
    'license_ids',
    'load_config',
    'parse',
    'simple_licenses',
]
