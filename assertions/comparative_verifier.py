"""Run one operation under several personas and compare the results field by field.

Each persona run gets its own session (the operation is responsible for
opening it); results are aligned by position and every non-baseline persona
is compared with the baseline persona under a per-field policy.
"""
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

import allure

from data.personas import Persona, QuirkKind
from utils.exceptions import ComparisonFailure
from utils.logger import get_logger

logger = get_logger(__name__)


class FieldPolicy(Enum):
    MUST_MATCH = "must_match"
    MUST_DIFFER = "must_differ"
    MAY_DIFFER = "may_differ"


class DivergenceKind(Enum):
    NONE = "none"  # 与 baseline 完全一致
    PER_ITEM = "per_item"  # 部分/全部商品不同，且取值不止一个
    UNIFORM = "uniform"  # 所有取值坍缩为同一个常量（且与 baseline 不同）


@dataclass
class FieldFinding:
    persona_id: str
    field: str
    policy: FieldPolicy
    kind: DivergenceKind
    mismatches: list = field(default_factory=list)  # [(index, baseline_value, value)]
    values: tuple = ()
    violation: str | None = None

    @property
    def distinct_values(self) -> int:
        return len(set(self.values))


@dataclass
class ComparisonReport:
    baseline_id: str
    persona_ids: list = field(default_factory=list)
    findings: list = field(default_factory=list)  # list[FieldFinding]
    violations: list = field(default_factory=list)  # list[str]
    collapsed_fields: list = field(default_factory=list)  # MUST_DIFFER 字段在多个 persona 间取值完全相同

    @property
    def passed(self) -> bool:
        return not self.violations

    def finding(self, persona_id: str, field_name: str) -> FieldFinding:
        for finding in self.findings:
            if finding.persona_id == persona_id and finding.field == field_name:
                return finding
        raise KeyError(f"no finding for {persona_id}.{field_name}")

    def divergences(self, kind: DivergenceKind) -> list:
        return [f for f in self.findings if f.kind is kind]

    def assert_ok(self):
        if self.violations:
            raise ComparisonFailure("cross-persona comparison failed:\n  " + "\n  ".join(self.violations),
                                    {"baseline": self.baseline_id, "personas": self.persona_ids,
                                     "violations": len(self.violations)})


def field_value(record, name: str):
    if isinstance(record, Mapping):
        return record[name]
    return getattr(record, name)


def classify(baseline_values: list, values: list) -> DivergenceKind:
    if all(b == v for b, v in zip(baseline_values, values)):
        return DivergenceKind.NONE
    if len(values) > 1 and len(set(values)) == 1:
        return DivergenceKind.UNIFORM
    return DivergenceKind.PER_ITEM


def combine_policies(baseline: FieldPolicy, other: FieldPolicy) -> FieldPolicy:
    """两个 persona 对同一字段的策略合并：有 quirk 的一方说了算，MAY_DIFFER 最宽松"""
    if baseline is other:
        return baseline
    if FieldPolicy.MAY_DIFFER in (baseline, other):
        return FieldPolicy.MAY_DIFFER
    return FieldPolicy.MUST_DIFFER


class ComparativeVerifier:

    def __init__(self, policy, baseline: Persona, allow_identical_divergence: bool = False):
        """
        :param policy: {field: FieldPolicy} 或 persona -> {field: FieldPolicy}
        :param baseline: 作为比较基准的 persona
        :param allow_identical_divergence: MUST_DIFFER 字段在多个 persona 上的差异值完全相同是否允许
        """
        self._policy = policy
        self.baseline = baseline
        self.allow_identical_divergence = allow_identical_divergence

    def policy_for(self, persona: Persona) -> dict:
        policy = self._policy(persona) if callable(self._policy) else self._policy
        return dict(policy)

    def field_policy(self, persona: Persona) -> dict:
        base = self.policy_for(self.baseline)
        other = self.policy_for(persona)
        return {name: combine_policies(base[name], other.get(name, base[name])) for name in base}

    # ================= 执行 =================
    def collect(self, operation, personas: list[Persona]) -> dict:
        """每个 persona 执行一次 operation(persona)，baseline 总是先执行"""
        ordered = [self.baseline] + [p for p in personas if p != self.baseline]
        results = {}
        for persona in ordered:
            with allure.step(f"Collect results as {persona.username}"):
                results[persona] = list(operation(persona))
            logger.info("collected %d record(s) for %s", len(results[persona]), persona.id)
        return results

    def verify(self, operation, personas: list[Persona]) -> ComparisonReport:
        return self.compare(self.collect(operation, personas))

    # ================= 比较 =================
    def compare(self, results: dict) -> ComparisonReport:
        if self.baseline not in results:
            raise ComparisonFailure(f"baseline persona {self.baseline.id} has no results",
                                    {"personas": [p.id for p in results]})
        baseline_records = results[self.baseline]
        report = ComparisonReport(baseline_id=self.baseline.id, persona_ids=[p.id for p in results])

        for persona, records in results.items():
            if persona == self.baseline:
                continue
            if len(records) != len(baseline_records):
                report.violations.append(f"{persona.id}: {len(records)} record(s), "
                                         f"baseline {self.baseline.id} has {len(baseline_records)}")
                continue
            for name, policy in self.field_policy(persona).items():
                report.findings.append(self._compare_field(persona, name, policy, baseline_records, records))

        report.violations.extend(f.violation for f in report.findings if f.violation)
        if len(results) > 2:
            self._check_collapsed(report)
        for violation in report.violations:
            logger.warning(violation)
        return report

    def _compare_field(self, persona, name, policy, baseline_records, records) -> FieldFinding:
        base_values = [field_value(r, name) for r in baseline_records]
        values = [field_value(r, name) for r in records]
        mismatches = [(i, b, v) for i, (b, v) in enumerate(zip(base_values, values)) if b != v]
        finding = FieldFinding(persona_id=persona.id, field=name, policy=policy,
                               kind=classify(base_values, values), mismatches=mismatches, values=tuple(values))

        if policy is FieldPolicy.MUST_MATCH and finding.kind is not DivergenceKind.NONE:
            finding.violation = (f"{persona.id}.{name} must match {self.baseline.id}: "
                                 f"{len(mismatches)} mismatch(es), first {mismatches[0]!r}")
        elif policy is FieldPolicy.MUST_DIFFER and finding.kind is DivergenceKind.NONE:
            finding.violation = f"{persona.id}.{name} must differ from {self.baseline.id} but is identical"
        return finding

    def _check_collapsed(self, report: ComparisonReport):
        """多个 persona 的 MUST_DIFFER 字段差异值完全一样：单独报告，默认视为失败"""
        by_field = {}
        for finding in report.findings:
            if finding.policy is FieldPolicy.MUST_DIFFER and finding.kind is not DivergenceKind.NONE:
                by_field.setdefault(finding.field, []).append(finding)
        for name, findings in by_field.items():
            if len(findings) < 2 or len({f.values for f in findings}) != 1:
                continue
            report.collapsed_fields.append(name)
            if not self.allow_identical_divergence:
                report.violations.append(f"{name}: divergent values of {[f.persona_id for f in findings]} "
                                         f"are identical to each other")


def product_field_policy(persona: Persona) -> dict:
    """商品比较策略：图片只对 VISUAL_CORRUPTION 的 persona 允许不同"""
    image_policy = FieldPolicy.MAY_DIFFER if persona.has_quirk(QuirkKind.VISUAL_CORRUPTION) else FieldPolicy.MUST_MATCH
    return {
        "name": FieldPolicy.MUST_MATCH,
        "description": FieldPolicy.MUST_MATCH,
        "price": FieldPolicy.MUST_MATCH,
        "image_reference": image_policy,
    }
