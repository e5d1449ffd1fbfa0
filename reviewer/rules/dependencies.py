"""Flag NuGet package references that are outdated or incompatible with .NET 8."""

from __future__ import annotations

import re
from typing import List

from reviewer.severity import Severity

from . import Concern, PatternRule, Scope
from .predicates import PackageMatches

RULES = (
    PatternRule(
        id="dependency.legacy-newtonsoft",
        concern=Concern.DEPENDENCY_COMPATIBILITY,
        severity=Severity.HIGH,
        scope=Scope.PER_PACKAGE,
        predicate=PackageMatches(name=re.compile(r"Newtonsoft\.Json$"), version=re.compile(r"9\.")),
        title="Outdated Package",
        message="{package} {version}: Old version detected. Upgrade to 13.x or migrate to System.Text.Json.",
    ),
    PatternRule(
        id="dependency.aspnetcore-2x",
        concern=Concern.DEPENDENCY_COMPATIBILITY,
        severity=Severity.HIGH,
        scope=Scope.PER_PACKAGE,
        predicate=PackageMatches(name=re.compile(r"Microsoft\.AspNetCore"), version=re.compile(r"2\.")),
        title="Framework Compatibility",
        message=(
            "{package} {version}: ASP.NET Core 2.x packages are incompatible with .NET 8. "
            "Upgrade to Microsoft.AspNetCore.App framework reference."
        ),
    ),
    PatternRule(
        id="dependency.legacy-sqlclient",
        concern=Concern.DEPENDENCY_COMPATIBILITY,
        severity=Severity.MEDIUM,
        scope=Scope.PER_PACKAGE,
        predicate=PackageMatches(name=re.compile(r"System\.Data\.SqlClient$")),
        title="Deprecated Driver",
        message=(
            "{package}: Consider using 'Microsoft.Data.SqlClient' which is the newer, "
            "maintained driver for SQL Server."
        ),
    ),
)


def get_rules() -> List[PatternRule]:
    return list(RULES)
