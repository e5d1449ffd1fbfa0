from reviewer.result import Issue, ScanResult
from reviewer.severity import Severity


def make_issue(severity, line=1):
    return Issue(
        file="A.cs",
        line=line,
        severity=severity,
        concern="error-handling",
        type="Generic Catch",
        message="message",
        rule="errors.generic-catch",
    )


def test_exit_code_follows_most_severe_issue():
    assert ScanResult().exit_code() == 0
    assert ScanResult(issues=[make_issue(Severity.LOW)]).exit_code() == 0
    assert ScanResult(issues=[make_issue(Severity.LOW), make_issue(Severity.MEDIUM, 2)]).exit_code() == 1
    assert ScanResult(issues=[make_issue(Severity.MEDIUM), make_issue(Severity.HIGH, 2)]).exit_code() == 2


def test_severity_rank_orders_levels():
    ranked = sorted(Severity, key=lambda severity: severity.rank, reverse=True)

    assert ranked == [Severity.HIGH, Severity.MEDIUM, Severity.LOW]


def test_summary_counts_and_total():
    result = ScanResult(
        issues=[make_issue(Severity.HIGH), make_issue(Severity.LOW, 2), make_issue(Severity.LOW, 3)]
    )

    summary = result.summary
    assert (summary.high, summary.medium, summary.low) == (1, 0, 2)
    assert summary.total == 3
    assert result.to_dict()["summary"] == {"high": 1, "medium": 0, "low": 2}
