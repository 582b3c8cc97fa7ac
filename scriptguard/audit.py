"""Audit trail for whitelist catalog checks.

One line per event: ``ISO8601_TIMESTAMP [OPERATION] key=value ...``, e.g.

    2026-02-01T10:00:00Z [CATALOG_MISSING] signature="method java.lang.String trim"
"""

import re
from datetime import datetime, timezone
from pathlib import Path

CATALOG_MISSING = "CATALOG_MISSING"
CATALOG_BROKEN = "CATALOG_BROKEN"
CATALOG_AUDIT = "CATALOG_AUDIT"

_ENTRY_RE = re.compile(r"^(?P<timestamp>\S+) \[(?P<operation>[A-Z_]+)\](?: (?P<pairs>.*))?$")
_PAIR_RE = re.compile(r'(\w+)=("(?:[^"\\]|\\.)*"|\S+)')


def _format_value(value: object) -> str:
    text = str(value)
    if " " in text or '"' in text:
        return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'
    return text


def _parse_value(raw: str) -> str:
    if raw.startswith('"'):
        return re.sub(r"\\(.)", r"\1", raw[1:-1])
    return raw


class AuditLogger:
    """Appends audit events to a log file, creating it on first use."""

    def __init__(self, log_path: Path) -> None:
        self.log_path = log_path

    @staticmethod
    def format_entry(operation: str, **kwargs: str | int | float | bool | None) -> str:
        """Render one entry without its trailing newline. None values are dropped."""
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        pairs = " ".join(f"{key}={_format_value(value)}" for key, value in kwargs.items() if value is not None)
        return f"{timestamp} [{operation}] {pairs}" if pairs else f"{timestamp} [{operation}]"

    def log(self, operation: str, **kwargs: str | int | float | bool | None) -> None:
        line = self.format_entry(operation, **kwargs)
        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.log_path, "a") as f:
            f.write(line + "\n")

    def entries(self) -> list[tuple[str, dict[str, str]]]:
        """Read back ``(operation, fields)`` pairs; an absent log has none."""
        if not self.log_path.exists():
            return []
        result = []
        with open(self.log_path) as f:
            for line in f:
                match = _ENTRY_RE.match(line.rstrip("\n"))
                if match is None:
                    continue
                fields = {key: _parse_value(raw) for key, raw in _PAIR_RE.findall(match.group("pairs") or "")}
                result.append((match.group("operation"), fields))
        return result
