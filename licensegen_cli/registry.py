"""Supported licenses and the templates that render them."""
from __future__ import annotations

import enum
from dataclasses import dataclass
from importlib import resources
from typing import Dict, FrozenSet, Optional, Sequence, Tuple

PACKAGE_NAME = __package__ or "licensegen_cli"
LICENSES_ROOT = resources.files(PACKAGE_NAME) / "data" / "licenses"


class LicenseKind(enum.Enum):
    MIT = "MIT"
    APACHE_2 = "Apache-2.0"
    BSD_2_CLAUSE = "BSD-2-Clause"
    BSD_3_CLAUSE = "BSD-3-Clause"
    BSD_3_CLAUSE_ATTRIBUTION = "BSD-3-Clause-Attribution"
    BSD_3_CLAUSE_MODIFICATION = "BSD-3-Clause-Modification"
    BSD_3_CLAUSE_NO_MILITARY = "BSD-3-Clause-No-Military-License"
    ISC = "ISC"
    BSL_1 = "BSL-1.0"
    UNLICENSE = "Unlicense"
    GPL_3 = "GPL-3.0"
    GPL_3_ONLY = "GPL-3.0-only"
    GPL_3_OR_LATER = "GPL-3.0-or-later"
    LGPL_3 = "LGPL-3.0"
    LGPL_3_ONLY = "LGPL-3.0-only"
    LGPL_3_OR_LATER = "LGPL-3.0-or-later"
    AGPL_3 = "AGPL-3.0"
    AGPL_3_ONLY = "AGPL-3.0-only"
    AGPL_3_OR_LATER = "AGPL-3.0-or-later"
    MPL_2 = "MPL-2.0"
    EPL_2 = "EPL-2.0"
    CDDL_1 = "CDDL-1.0"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class FieldSpec:
    key: str
    prompt: str
    optional: bool = False


YEAR = FieldSpec("year", "Copyright year")
FULLNAME = FieldSpec("fullname", "Copyright holder")
PROJECT = FieldSpec("project", "Project name")
ORGANIZATION = FieldSpec("organization", "Organization (optional)", optional=True)
WEBSITE = FieldSpec("website", "Organization website (optional)", optional=True)
DESCRIPTION = FieldSpec("description", "One-line description of the program (optional)", optional=True)


@dataclass(frozen=True)
class TemplateSpec:
    kind: LicenseKind
    name: str
    filename: str
    aliases: Sequence[str]
    fields: Sequence[FieldSpec]
    notice: Optional[str] = None
    # Notice a program shows when it starts interactively (GNU licenses).
    interactive: Optional[str] = None
    # Fixed template values, e.g. whether "or any later version" applies.
    constants: Sequence[Tuple[str, bool]] = ()

    @property
    def variables(self) -> FrozenSet[str]:
        """Names that must resolve to a value before rendering."""
        return frozenset(field.key for field in self.fields if not field.optional)

    @property
    def body(self) -> str:
        """Raw template source, as the renderer's loader sees it."""
        return load_template_text(self.filename)


def load_template_text(filename: str) -> str:
    """Read a bundled template; the renderer's Jinja loader goes through here too."""
    resource = LICENSES_ROOT / filename
    if not resource.is_file():
        raise FileNotFoundError(f"Template file not found: {filename}")
    return resource.read_text(encoding="utf-8")


def normalize_license_key(name: str) -> str:
    """Normalize a license selector to simplify alias matching."""
    return "".join(ch for ch in name.lower() if ch.isalnum())


COPYRIGHT_FIELDS = (YEAR, FULLNAME)
GNU_FIELDS = (PROJECT, DESCRIPTION) + COPYRIGHT_FIELDS
# The deprecated bare GNU identifiers mean "version 3 only".
VERSION_ONLY = (("or_later", False),)
OR_LATER = (("or_later", True),)

LICENSE_SPECS: Sequence[TemplateSpec] = (
    TemplateSpec(
        kind=LicenseKind.MIT,
        name="MIT License",
        filename="MIT.txt",
        aliases=("mit", "expat"),
        fields=COPYRIGHT_FIELDS,
    ),
    TemplateSpec(
        kind=LicenseKind.APACHE_2,
        name="Apache License 2.0",
        filename="Apache-2.0.txt",
        aliases=("apache", "apache2", "apache-2"),
        fields=COPYRIGHT_FIELDS,
        notice="Apache-2.0.notice.txt",
    ),
    TemplateSpec(
        kind=LicenseKind.BSD_2_CLAUSE,
        name='BSD 2-Clause "Simplified" License',
        filename="BSD-2-Clause.txt",
        aliases=("bsd2", "simplified-bsd", "freebsd"),
        fields=COPYRIGHT_FIELDS,
    ),
    TemplateSpec(
        kind=LicenseKind.BSD_3_CLAUSE,
        name='BSD 3-Clause "New" or "Revised" License',
        filename="BSD-3-Clause.txt",
        aliases=("bsd", "bsd3", "new-bsd", "revised-bsd"),
        fields=COPYRIGHT_FIELDS,
    ),
    TemplateSpec(
        kind=LicenseKind.BSD_3_CLAUSE_ATTRIBUTION,
        name="BSD with attribution",
        filename="BSD-3-Clause-Attribution.txt",
        aliases=("bsd3-attribution",),
        fields=COPYRIGHT_FIELDS + (ORGANIZATION, WEBSITE),
    ),
    TemplateSpec(
        kind=LicenseKind.BSD_3_CLAUSE_MODIFICATION,
        name="BSD 3-Clause Modification",
        filename="BSD-3-Clause-Modification.txt",
        aliases=("bsd3-modification",),
        fields=COPYRIGHT_FIELDS,
    ),
    TemplateSpec(
        kind=LicenseKind.BSD_3_CLAUSE_NO_MILITARY,
        name="BSD 3-Clause No Military License",
        filename="BSD-3-Clause-No-Military-License.txt",
        aliases=("bsd3-no-military", "bsd-3-clause-no-military"),
        fields=COPYRIGHT_FIELDS,
    ),
    TemplateSpec(
        kind=LicenseKind.ISC,
        name="ISC License",
        filename="ISC.txt",
        aliases=("isc",),
        fields=COPYRIGHT_FIELDS,
    ),
    TemplateSpec(
        kind=LicenseKind.BSL_1,
        name="Boost Software License 1.0",
        filename="BSL-1.0.txt",
        aliases=("bsl", "boost", "boost-1.0"),
        fields=(PROJECT,) + COPYRIGHT_FIELDS,
    ),
    TemplateSpec(
        kind=LicenseKind.UNLICENSE,
        name="The Unlicense",
        filename="Unlicense.txt",
        aliases=("unlicense", "public-domain"),
        fields=(PROJECT,),
    ),
    TemplateSpec(
        kind=LicenseKind.GPL_3,
        name="GNU General Public License v3.0",
        filename="GPL-3.0.txt",
        aliases=(),
        fields=GNU_FIELDS,
        notice="GPL-3.0.notice.txt",
        interactive="GPL-3.0.interactive.txt",
        constants=VERSION_ONLY,
    ),
    TemplateSpec(
        kind=LicenseKind.GPL_3_ONLY,
        name="GNU General Public License v3.0 only",
        filename="GPL-3.0.txt",
        aliases=("gpl3-only", "gplv3-only"),
        fields=GNU_FIELDS,
        notice="GPL-3.0.notice.txt",
        interactive="GPL-3.0.interactive.txt",
        constants=VERSION_ONLY,
    ),
    TemplateSpec(
        kind=LicenseKind.GPL_3_OR_LATER,
        name="GNU General Public License v3.0 or later",
        filename="GPL-3.0.txt",
        aliases=("gpl", "gpl3", "gplv3"),
        fields=GNU_FIELDS,
        notice="GPL-3.0.notice.txt",
        interactive="GPL-3.0.interactive.txt",
        constants=OR_LATER,
    ),
    TemplateSpec(
        kind=LicenseKind.LGPL_3,
        name="GNU Lesser General Public License v3.0",
        filename="LGPL-3.0.txt",
        aliases=(),
        fields=GNU_FIELDS,
        notice="LGPL-3.0.notice.txt",
        constants=VERSION_ONLY,
    ),
    TemplateSpec(
        kind=LicenseKind.LGPL_3_ONLY,
        name="GNU Lesser General Public License v3.0 only",
        filename="LGPL-3.0.txt",
        aliases=("lgpl3-only", "lgplv3-only"),
        fields=GNU_FIELDS,
        notice="LGPL-3.0.notice.txt",
        constants=VERSION_ONLY,
    ),
    TemplateSpec(
        kind=LicenseKind.LGPL_3_OR_LATER,
        name="GNU Lesser General Public License v3.0 or later",
        filename="LGPL-3.0.txt",
        aliases=("lgpl", "lgpl3", "lgplv3"),
        fields=GNU_FIELDS,
        notice="LGPL-3.0.notice.txt",
        constants=OR_LATER,
    ),
    TemplateSpec(
        kind=LicenseKind.AGPL_3,
        name="GNU Affero General Public License v3.0",
        filename="AGPL-3.0.txt",
        aliases=(),
        fields=GNU_FIELDS,
        notice="AGPL-3.0.notice.txt",
        interactive="AGPL-3.0.interactive.txt",
        constants=VERSION_ONLY,
    ),
    TemplateSpec(
        kind=LicenseKind.AGPL_3_ONLY,
        name="GNU Affero General Public License v3.0 only",
        filename="AGPL-3.0.txt",
        aliases=("agpl3-only", "agplv3-only"),
        fields=GNU_FIELDS,
        notice="AGPL-3.0.notice.txt",
        interactive="AGPL-3.0.interactive.txt",
        constants=VERSION_ONLY,
    ),
    TemplateSpec(
        kind=LicenseKind.AGPL_3_OR_LATER,
        name="GNU Affero General Public License v3.0 or later",
        filename="AGPL-3.0.txt",
        aliases=("agpl", "agpl3", "agplv3"),
        fields=GNU_FIELDS,
        notice="AGPL-3.0.notice.txt",
        interactive="AGPL-3.0.interactive.txt",
        constants=OR_LATER,
    ),
    TemplateSpec(
        kind=LicenseKind.MPL_2,
        name="Mozilla Public License 2.0",
        filename="MPL-2.0.txt",
        aliases=("mpl", "mpl2", "mozilla"),
        fields=(PROJECT,) + COPYRIGHT_FIELDS,
        notice="MPL-2.0.notice.txt",
    ),
    TemplateSpec(
        kind=LicenseKind.EPL_2,
        name="Eclipse Public License 2.0",
        filename="EPL-2.0.txt",
        aliases=("epl", "epl2", "eclipse"),
        fields=(PROJECT,) + COPYRIGHT_FIELDS,
        notice="EPL-2.0.notice.txt",
    ),
    TemplateSpec(
        kind=LicenseKind.CDDL_1,
        name="Common Development and Distribution License 1.0",
        filename="CDDL-1.0.txt",
        aliases=("cddl", "cddl1"),
        fields=(PROJECT,) + COPYRIGHT_FIELDS,
        notice="CDDL-1.0.notice.txt",
    ),
)

_SPECS_BY_KIND: Dict[LicenseKind, TemplateSpec] = {spec.kind: spec for spec in LICENSE_SPECS}

LICENSE_MAP: Dict[str, LicenseKind] = {normalize_license_key(spec.kind.value): spec.kind for spec in LICENSE_SPECS}
for _spec in LICENSE_SPECS:
    for _alias in _spec.aliases:
        LICENSE_MAP.setdefault(normalize_license_key(_alias), _spec.kind)


def lookup(kind: LicenseKind) -> TemplateSpec:
    return _SPECS_BY_KIND[kind]


def parse_kind(name: str) -> LicenseKind:
    kind = LICENSE_MAP.get(normalize_license_key(name))
    if kind is None:
        raise KeyError(f"Unsupported license '{name}'. Use --list to see supported identifiers.")
    return kind
