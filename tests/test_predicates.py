import re

from reviewer.rules import ScanContext
from reviewer.rules.predicates import (
    ContextGated,
    CountComparison,
    FileFlag,
    LineMatches,
    PackageMatches,
    WholeFileContains,
)
from reviewer.utils.project import PackageReference


def make_context(text="", depth=0):
    context = ScanContext(filename="Sample.cs", text=text)
    for _ in range(depth):
        context.tracker.advance("foreach (var item in items)")
    return context


def test_whole_file_contains_respects_absent_pattern():
    predicate = WholeFileContains(pattern=re.compile(r":.*IDisposable"), absent=re.compile(r"Dispose\(\)"))

    assert predicate.evaluate("class A : IDisposable {}", make_context()) == {"match": ": IDisposable"}
    assert predicate.evaluate("class A : IDisposable { void Dispose() {} }", make_context()) is None
    assert predicate.evaluate("class A {}", make_context()) is None


def test_line_matches_captures_named_groups_and_honours_exclude():
    predicate = LineMatches(pattern=re.compile(r"\b(?P<handle>IntPtr)\b"), exclude=re.compile(r"//"))

    captured = predicate.evaluate("    IntPtr handle = Open();", make_context())

    assert captured == {"match": "IntPtr", "handle": "IntPtr"}
    assert predicate.evaluate("    // IntPtr handle", make_context()) is None


def test_count_comparison_reports_counts_only_when_opening_exceeds_closing():
    predicate = CountComparison(opening=re.compile(r"\+="), closing=re.compile(r"-="))

    assert predicate.evaluate("a += x; b += y; c += z; a -= x;", make_context()) == {"opened": 3, "closed": 1}
    assert predicate.evaluate("a += x; b += y; a -= x; b -= y;", make_context()) is None
    assert predicate.evaluate("a -= x;", make_context()) is None


def test_context_gated_requires_depth_and_skips_escape():
    predicate = ContextGated(
        inner=LineMatches(pattern=re.compile(r"await\s+.*\.Find")),
        min_depth=1,
        escape=re.compile(r"Task\.WhenAll"),
    )
    line = "var user = await _db.Users.FindAsync(id);"

    assert predicate.evaluate(line, make_context(depth=0)) is None
    assert predicate.evaluate(line, make_context(depth=1)) is not None
    assert predicate.evaluate("await Task.WhenAll(ids.Select(id => repo.FindAsync(id)));", make_context(depth=1)) is None


def test_file_flag_is_computed_once_per_context():
    flag = FileFlag("dispose-call", re.compile(r"Dispose"))
    context = make_context("timer.Dispose();")

    assert flag.is_set(context)
    context.text = "no disposal here"
    assert flag.is_set(context)
    assert context.flags == {"dispose-call": True}


def test_context_gated_unless_file_flag():
    predicate = ContextGated(
        inner=LineMatches(pattern=re.compile(r"new\s+Timer")),
        unless_file=FileFlag("dispose-call", re.compile(r"Dispose")),
    )

    assert predicate.evaluate("var t = new Timer(10);", make_context("var t = new Timer(10);")) is not None
    disposed = "var t = new Timer(10);\nt.Dispose();"
    assert predicate.evaluate("var t = new Timer(10);", make_context(disposed)) is None


def test_package_matches_name_and_version_prefix():
    predicate = PackageMatches(name=re.compile(r"Microsoft\.AspNetCore"), version=re.compile(r"2\."))

    assert predicate.evaluate(PackageReference("Microsoft.AspNetCore.Mvc", "2.2.0"), make_context()) == {
        "package": "Microsoft.AspNetCore.Mvc",
        "version": "2.2.0",
    }
    assert predicate.evaluate(PackageReference("Microsoft.AspNetCore.Mvc", "8.0.0"), make_context()) is None
    assert predicate.evaluate(PackageReference("Microsoft.AspNetCore.Mvc", None), make_context()) is None
    assert predicate.evaluate(PackageReference("Serilog", "2.0.0"), make_context()) is None


def test_predicates_are_pure():
    predicate = CountComparison(opening=re.compile(r"\+="), closing=re.compile(r"-="))
    text = "a += b; c += d;"

    assert predicate.evaluate(text, make_context(text)) == predicate.evaluate(text, make_context(text))
