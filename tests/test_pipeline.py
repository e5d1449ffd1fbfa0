import pytest

from reviewer.config import ReviewConfig
from reviewer.errors import PathNotFoundError
from reviewer.pipeline import scan_path
from reviewer.report import MEMORY_LEAK_STYLE, GroupBy, render
from reviewer.rules import Concern

LEAKY_SOURCE = """public class Worker : IDisposable
{
    public async void Run() { }
}
"""


def write_tree(root):
    (root / "src").mkdir()
    (root / "src" / "Worker.cs").write_text(LEAKY_SOURCE, encoding="utf-8")
    (root / "src" / "Clean.cs").write_text("public class Clean { }\n", encoding="utf-8")
    (root / "src" / "Broken.cs").write_bytes(b"public class \xff\xfe Broken { }")
    return root


def test_unreadable_file_is_reported_without_failing_the_batch(tmp_path):
    write_tree(tmp_path)

    result = scan_path(tmp_path, [Concern.RESOURCE_LIFETIME])

    assert result.files_scanned == 2
    assert [failure.path for failure in result.failures] == ["src/Broken.cs"]
    assert {issue.file for issue in result.issues} == {"src/Worker.cs"}
    text = render(result, GroupBy.FILE, MEMORY_LEAK_STYLE)
    assert "### src/Worker.cs" in text
    assert "- `src/Broken.cs`:" in text


def test_build_output_directories_are_skipped(tmp_path):
    (tmp_path / "obj").mkdir()
    (tmp_path / "obj" / "Generated.cs").write_text(LEAKY_SOURCE, encoding="utf-8")
    (tmp_path / "bin").mkdir()
    (tmp_path / "bin" / "Copy.cs").write_text(LEAKY_SOURCE, encoding="utf-8")

    result = scan_path(tmp_path, [Concern.RESOURCE_LIFETIME])

    assert result.scanned_nothing
    assert result.issues == []


def test_single_file_is_named_by_basename(tmp_path):
    source = tmp_path / "Worker.cs"
    source.write_text(LEAKY_SOURCE, encoding="utf-8")

    result = scan_path(source, [Concern.RESOURCE_LIFETIME])

    assert result.files_scanned == 1
    assert {issue.file for issue in result.issues} == {"Worker.cs"}


def test_non_source_file_yields_empty_scan(tmp_path):
    notes = tmp_path / "notes.txt"
    notes.write_text("async void everywhere", encoding="utf-8")

    result = scan_path(notes, [Concern.RESOURCE_LIFETIME])

    assert result.scanned_nothing
    assert result.passed


def test_missing_path_is_fatal(tmp_path):
    with pytest.raises(PathNotFoundError):
        scan_path(tmp_path / "missing", [Concern.RESOURCE_LIFETIME])


def test_rescanning_is_byte_identical(tmp_path):
    write_tree(tmp_path)

    first = render(scan_path(tmp_path, [Concern.RESOURCE_LIFETIME]), GroupBy.FILE, MEMORY_LEAK_STYLE)
    second = render(scan_path(tmp_path, [Concern.RESOURCE_LIFETIME]), GroupBy.FILE, MEMORY_LEAK_STYLE)

    assert first == second


def test_parallel_scan_matches_sequential_scan(tmp_path):
    write_tree(tmp_path)
    for index in range(6):
        (tmp_path / f"Extra{index}.cs").write_text(LEAKY_SOURCE, encoding="utf-8")

    sequential = scan_path(tmp_path, [Concern.RESOURCE_LIFETIME], ReviewConfig(workers=1))
    parallel = scan_path(tmp_path, [Concern.RESOURCE_LIFETIME], ReviewConfig(workers=4))

    assert parallel.issues == sequential.issues
    assert parallel.failures == sequential.failures
    assert parallel.files_scanned == sequential.files_scanned == 8


def test_disabled_rules_are_not_evaluated(tmp_path):
    source = tmp_path / "Worker.cs"
    source.write_text(LEAKY_SOURCE, encoding="utf-8")

    result = scan_path(source, [Concern.RESOURCE_LIFETIME], ReviewConfig(disabled_rules=("resource.async-void",)))

    assert [issue.rule for issue in result.issues] == ["resource.missing-dispose"]
