import html

import allure

from assertions.comparative_verifier import ComparisonReport, DivergenceKind


def build_comparison_insight(report: ComparisonReport) -> list[str]:
    """生成 Comparison Insight 文本"""
    lines = []
    uniform = report.divergences(DivergenceKind.UNIFORM)
    per_item = report.divergences(DivergenceKind.PER_ITEM)

    for finding in uniform:
        lines.append(f"• {finding.persona_id}.{finding.field}: uniform corruption, "
                     f"all {len(finding.values)} values are {finding.values[0]!r}")
    for finding in per_item:
        lines.append(f"• {finding.persona_id}.{finding.field}: per-item divergence, "
                     f"{len(finding.mismatches)} of {len(finding.values)} differ")
    for name in report.collapsed_fields:
        lines.append(f"• {name}: divergent values are identical across personas")
    if not uniform and not per_item:
        lines.append(f"• All personas match {report.baseline_id}")
    return lines


def render_mismatch_rows(report: ComparisonReport) -> str:
    rows = []
    for finding in report.findings:
        for index, baseline_value, value in finding.mismatches:
            rows.append(
                f"<tr class='{'failed' if finding.violation else 'muted'}'>"
                f"<td>{html.escape(finding.persona_id)}</td>"
                f"<td>{html.escape(finding.field)}</td>"
                f"<td>{index}</td>"
                f"<td>{html.escape(str(baseline_value))}</td>"
                f"<td>{html.escape(str(value))}</td>"
                f"<td>{finding.policy.name}</td></tr>")
    return "".join(rows)


def render_comparison_report(report: ComparisonReport) -> str:
    insight = "".join(f"<li>{html.escape(line)}</li>" for line in build_comparison_insight(report))
    violations = "".join(f"<li>{html.escape(v)}</li>" for v in report.violations) or "<li>None</li>"
    status = "✅ PASSED" if report.passed else "❌ FAILED"

    return f"""
<!DOCTYPE html>
<html>
<head>
<style>
  body {{ font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Arial; color: #333; }}
  .insight {{ padding: 12px 16px; border-left: 4px solid #f0ad4e; background: #fff8e1; }}
  .insight ul, .violations ul {{ list-style: none; padding-left: 0; }}
  .violations {{ padding: 12px 16px; border-left: 4px solid #f44336; background: #ffebee; }}
  table {{ border-collapse: collapse; margin-top: 12px; font-size: 13px; }}
  th, td {{ border: 1px solid #ddd; padding: 4px 8px; text-align: left; }}
  tr.failed td {{ color: #d32f2f; }}
  tr.muted td {{ color: #777; }}
</style>
</head>
<body>
<h2>🔍 Persona Comparison {status}</h2>
<p>Baseline: <b>{html.escape(report.baseline_id)}</b>, personas: {html.escape(", ".join(report.persona_ids))}</p>
<div class="insight"><h3>🧠 Insight</h3><ul>{insight}</ul></div>
<div class="violations"><h3>🛑 Violations</h3><ul>{violations}</ul></div>
<table>
  <tr><th>Persona</th><th>Field</th><th>Item</th><th>Baseline</th><th>Value</th><th>Policy</th></tr>
  {render_mismatch_rows(report)}
</table>
</body>
</html>
"""


def attach_comparison_report(report: ComparisonReport):
    allure.attach(
        render_comparison_report(report),
        name="Persona Comparison",
        attachment_type=allure.attachment_type.HTML
    )
