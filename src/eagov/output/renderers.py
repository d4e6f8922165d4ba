"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer. Evidence lines
are user data, so they are printed as ``Text`` (never as markup).
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from eagov.output.console import create_console, get_output, style_for_severity

if TYPE_CHECKING:
    from rich.console import Console

    from eagov.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    elif result.rejected:
        _render_rejection(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    items = result.data.get("items")
    if items and isinstance(items, list):
        return "\n".join(_extract_id(item) for item in items if _extract_id(item))

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _extract_id(item: Any) -> str:
    if isinstance(item, dict) and item.get("id") is not None:
        return str(item["id"])
    return ""


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    console.print(Text("OK", style="ea.ok"), Text(f"  {result.op}", style="ea.op"), sep="")


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    console.print(Text(f"  {key}: ", style="ea.key"), Text(str(value)), sep="")


def _render_findings(console: Console, report: dict[str, Any], *, indent: int = 2) -> None:
    """Print one violation report: headline plus one bullet per evidence line."""
    prefix = " " * indent
    severity = str(report.get("severity", "error"))
    headline = Text(prefix)
    headline.append(str(report.get("rule_id", "?")), style="ea.rule")
    headline.append("  ")
    headline.append(str(report.get("title", "")))
    headline.append(f"  [{severity}]", style=style_for_severity(severity))
    console.print(headline)
    for line in report.get("highlights", []):
        console.print(Text(f"{prefix}  - {line}", style="ea.evidence"))


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))

    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}")


def _render_telemetry_tree(
    console: Console,
    span_data: dict[str, Any],
    indent: int = 4,
) -> None:
    """Render a hierarchical span tree with color-coded timing."""
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)

    if duration > 1000:
        style = "bold red"
    elif duration > 100:
        style = "yellow"
    else:
        style = "dim"

    line = Text(prefix)
    line.append(f"{duration:>8.2f}ms", style=style)
    line.append(f"  {name}")
    annotations = span_data.get("annotations") or {}
    if annotations:
        line.append(f"  ({', '.join(f'{k}={v}' for k, v in annotations.items())})")
    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


# ── Error renderers ───────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="ea.error"),
        Text(f"  {result.op}", style="ea.op"),
        Text(" — "),
        Text(msg),
        sep="",
    )

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))
    if verbose:
        _render_meta(console, result)


def _render_rejection(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Blocking governance violation: the rule, then every evidence line."""
    console.print(
        Text("REJECTED", style="ea.error"), Text(f"  {result.op}", style="ea.op"), sep=""
    )
    for report in result.findings:
        _render_findings(console, report)
    if verbose:
        _render_scope(console, result.data)
        _render_meta(console, result)


# ── Governance renderers ──────────────────────────────────────────────


def _render_scope(console: Console, data: dict[str, Any]) -> None:
    for key in ("source", "governance_mode", "lifecycle_coverage", "objects", "relationships"):
        if key in data:
            _field(console, key, data[key])


def _render_validate(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Accepted validation, with any advisory findings listed below."""
    _status_line(console, result)
    _render_scope(console, result.data)
    advisories = result.findings
    if advisories:
        console.print()
        console.print(Text(f"  {len(advisories)} advisory finding(s):", style="ea.warning"))
        for report in advisories:
            _render_findings(console, report, indent=4)
    if verbose:
        _render_meta(console, result)


def _render_rules(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Rule catalog as a table, in evaluation order."""
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Rule", style="ea.rule", no_wrap=True)
    table.add_column("Title")
    table.add_column("Severity")
    for item in result.data.get("items", []):
        severity = str(item.get("severity", ""))
        table.add_row(
            str(item.get("priority", "")),
            str(item.get("id", "")),
            str(item.get("title", "")),
            Text(severity, style=style_for_severity(severity)),
        )
    console.print(table)
    _field(console, "governance_mode", result.data.get("governance_mode", ""))
    _field(console, "lifecycle_coverage", result.data.get("lifecycle_coverage", ""))
    if verbose:
        _render_meta(console, result)


def _render_roles(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Roles with their descriptions; permissions listed one per line."""
    enforced = "enabled" if result.data.get("rbac_enabled") else "disabled (single-user mode)"
    _field(console, "rbac", enforced)
    for item in result.data.get("items", []):
        console.print()
        console.print(Text(str(item.get("id", "")), style="ea.role"))
        console.print(Text(f"  {item.get('description', '')}", style="dim"))
        for permission in item.get("permissions", []):
            console.print(Text(f"    {permission}"))
    if verbose:
        _render_meta(console, result)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "validate": _render_validate,
    "rules": _render_rules,
    "roles": _render_roles,
}
