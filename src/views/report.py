"""
Textes de fin de migration.
"""
from __future__ import annotations


def build_summary(report) -> str:
    lines = [
        f"Rooms créées: {len(report.created)}",
        f"Rooms déjà migrées: {len(report.skipped)}",
        f"Rooms en échec: {report.failed}",
    ]
    for name, count in sorted(report.failures.items()):
        lines.append(f"  - {name}: {count}")
    if report.partial:
        lines.append(f"Rooms partiellement peuplées: {', '.join(report.partial)}")
    if report.unmapped:
        lines.append(f"Rooms créées sans correspondance enregistrée: {', '.join(report.unmapped)}")
    return "\n".join(lines)


def build_no_export(path: str) -> str:
    return f"Export introuvable: {path}"


__all__ = ["build_summary", "build_no_export"]
