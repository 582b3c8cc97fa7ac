"""Audit a whitelist catalog against the live type system.

Every entry is checked with ``Signature.exists``. Entries whose member is not
there are reported as missing; entries naming a type that cannot be resolved
are reported as broken, since the catalog line itself is stale or malformed.
"""

import argparse
import importlib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from .audit import CATALOG_AUDIT, CATALOG_BROKEN, CATALOG_MISSING, AuditLogger
from .errors import UnknownTypeError
from .models.signature import Signature
from .models.types import TypeResolver
from .security.whitelist import EnumeratingWhitelist
from .typesystem.python import PythonTypeSystem


@dataclass
class CatalogReport:
    """Outcome of auditing a catalog."""

    total: int = 0
    missing: list[str] = field(default_factory=list)
    broken: dict[str, str] = field(default_factory=dict)
    wildcards: list[str] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.missing and not self.broken


def audit_catalog(
    catalog: EnumeratingWhitelist | Iterable[Signature],
    resolver: TypeResolver,
    audit: AuditLogger | None = None,
) -> CatalogReport:
    """Check each distinct catalog entry, in catalog sort order.

    Wildcard entries cannot name one member, so only their declaring type is
    checked.
    """
    signatures = catalog.signatures() if isinstance(catalog, EnumeratingWhitelist) else catalog
    entries = sorted(set(signatures))
    report = CatalogReport(total=len(entries))

    for signature in entries:
        text = str(signature)
        try:
            if signature.is_wildcard:
                resolver.resolve(signature.declaring_type)
                report.wildcards.append(text)
                continue
            exists = signature.exists(resolver)
        except UnknownTypeError as e:
            report.broken[text] = str(e)
            if audit:
                audit.log(CATALOG_BROKEN, signature=text, error=str(e))
            continue

        if not exists:
            report.missing.append(text)
            if audit:
                audit.log(CATALOG_MISSING, signature=text)

    if audit:
        audit.log(
            CATALOG_AUDIT,
            total=report.total,
            missing=len(report.missing),
            broken=len(report.broken),
            passed=report.passed,
        )
    return report


def load_catalog(target: str) -> tuple[EnumeratingWhitelist, TypeResolver]:
    """Call a ``module:factory`` target.

    The factory returns either a whitelist, audited against Python classes,
    or a ``(whitelist, resolver)`` pair.
    """
    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(f"Expected module:factory, got: {target}")
    factory = getattr(importlib.import_module(module_name), attr, None)
    if factory is None or not callable(factory):
        raise ValueError(f"No callable {attr} in {module_name}")

    result = factory()
    if isinstance(result, tuple):
        whitelist, resolver = result
    else:
        whitelist, resolver = result, PythonTypeSystem()
    if not isinstance(whitelist, EnumeratingWhitelist):
        raise ValueError(f"{target} did not return an EnumeratingWhitelist")
    return whitelist, resolver


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for catalog auditing."""
    parser = argparse.ArgumentParser(
        description="Check that every whitelist entry names a member that exists"
    )
    parser.add_argument(
        "--whitelist",
        required=True,
        help="Importable module:factory returning the whitelist to audit",
    )
    parser.add_argument(
        "--audit-log",
        type=Path,
        default=None,
        help="Append audit events to this file",
    )
    args = parser.parse_args(argv)

    try:
        whitelist, resolver = load_catalog(args.whitelist)
    except (ImportError, ValueError) as e:
        print(f"Error: {e}")
        return 2

    audit = AuditLogger(args.audit_log) if args.audit_log else None
    report = audit_catalog(whitelist, resolver, audit)

    for text in report.missing:
        print(f"missing: {text}")
    for text, error in report.broken.items():
        print(f"broken: {text} ({error})")
    print(
        f"Audited {report.total} entries: {len(report.missing)} missing, "
        f"{len(report.broken)} broken, {len(report.wildcards)} wildcard"
    )
    return 0 if report.passed else 1


if __name__ == "__main__":
    raise SystemExit(main())
