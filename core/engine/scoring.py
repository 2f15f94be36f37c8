"""
Score aggregation and severity mapping
"""
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from core.models import RiskReason, Severity
from .detectors import DETECTOR_ORDER, Finding
from .rules import RiskRules

MAX_SCORE = 100


@dataclass(frozen=True)
class RiskScore:
    score: int
    severity: Severity
    findings: Tuple[Finding, ...] = ()

    @property
    def reasons(self) -> List[RiskReason]:
        return [finding.reason for finding in self.findings]


NO_RISK = RiskScore(score=0, severity=Severity.LOW)


def rank_findings(findings: Iterable[Finding]) -> List[Finding]:
    """Drop duplicate reasons (first wins), order by weight desc then detector order"""
    unique = {}
    for finding in findings:
        unique.setdefault(finding.reason, finding)
    return sorted(unique.values(), key=lambda f: (-f.weight, DETECTOR_ORDER[f.reason]))


def severity_for_score(score: int, rules: RiskRules) -> Severity:
    """
    Map a risk score to a severity tier.

    - score >= high cut-off (70) → High
    - score >= medium cut-off (40) → Medium
    - otherwise → Low
    """
    if score >= rules.high_severity_score:
        return Severity.HIGH
    elif score >= rules.medium_severity_score:
        return Severity.MEDIUM
    else:
        return Severity.LOW


def aggregate(findings: Iterable[Finding], rules: RiskRules) -> RiskScore:
    """Sum triggered weights (capped); a Lost finding overrides to 100 / High"""
    ranked = tuple(rank_findings(findings))
    if any(finding.reason == RiskReason.LOST for finding in ranked):
        return RiskScore(score=MAX_SCORE, severity=Severity.HIGH, findings=ranked)
    score = min(MAX_SCORE, sum(finding.weight for finding in ranked))
    return RiskScore(score=score, severity=severity_for_score(score, rules), findings=ranked)
