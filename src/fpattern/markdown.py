from __future__ import annotations

from .lint import LintResult
from .selection import FilterReport


def render_filter_markdown(
    report: FilterReport,
    *,
    title: str = "fpattern",
    include_unmatched: bool = False,
    max_names: int = 50,
) -> str:
    lines: list[str] = [f"## {title}", "", f"Pattern: `{report.pattern}`", ""]

    if not report.total():
        lines.append("_No filenames given._")
        return "\n".join(lines)

    lines.append(f"### Matched ({len(report.matched)} of {report.total()})")
    lines.append("")
    if report.matched:
        for name in report.matched[:max_names]:
            lines.append(f"- `{name}`")
        if len(report.matched) > max_names:
            lines.append(f"- _…and {len(report.matched) - max_names} more_")
    else:
        lines.append("_None_")
    lines.append("")

    if include_unmatched and report.unmatched:
        lines.append(f"### Not matched ({len(report.unmatched)})")
        lines.append("")
        for name in report.unmatched[:max_names]:
            lines.append(f"- `{name}`")
        if len(report.unmatched) > max_names:
            lines.append(f"- _…and {len(report.unmatched) - max_names} more_")
        lines.append("")

    return "\n".join(lines)


def render_lint_markdown(result: LintResult, *, title: str = "Check") -> str:
    if not result.issues:
        return f"### {title}\n\n✅ No pattern issues found.\n"

    lines: list[str] = [f"### {title}", ""]
    for iss in result.issues:
        loc = ""
        if iss.pattern is not None:
            loc = f"`{iss.pattern}`"
            if iss.position is not None:
                loc += f" at {iss.position}"
            loc += ": "
        hint = f" _(hint: {iss.hint})_" if iss.hint else ""
        icon = "❌" if iss.severity == "ERROR" else "⚠️"
        lines.append(f"- {icon} **{iss.code}**: {loc}{iss.message}{hint}")
    lines.append("")
    return "\n".join(lines)
