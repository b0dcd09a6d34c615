"""End-to-end tests for parse_output and resolved_versions."""

import pytest

from depinspector.model import Coordinate, DependencyStatus, ModuleInfo, Requester
from depinspector.parsing import Dialect, parse_output, resolved_versions


def _by_key(module: ModuleInfo):
    return {d.coordinate.key: d for d in module.dependencies}


def test_single_conflicting_line():
    modules = parse_output(
        "+--- com.google.code.gson:gson:2.8.6 -> 2.8.9", Dialect.GRADLE, "app"
    )
    assert len(modules) == 1
    [node] = modules[0].dependencies
    assert node.coordinate == Coordinate("com.google.code.gson", "gson")
    assert node.resolved_version == "2.8.9"
    assert node.requested_version == "2.8.6"
    assert node.status is DependencyStatus.CONFLICT
    assert node.requested_by == (Requester("Project Root", "2.8.6", True),)


def test_nested_requester():
    modules = parse_output("+--- a:b:1.0\n|    +--- c:d:2.0\n", Dialect.GRADLE, "app")
    node = _by_key(modules[0])["c:d"]
    assert node.requested_by == (Requester("b:1.0", "2.0", False),)


@pytest.mark.parametrize("dialect", list(Dialect))
@pytest.mark.parametrize("text", ["", "\n\n", "BUILD SUCCESSFUL in 1s\n"])
def test_no_dependencies_gives_empty_result(text, dialect):
    assert parse_output(text, dialect, "app") == ()


def test_same_coordinate_two_branches_without_conflict():
    text = (
        "+--- a:b:1.0\n"
        "|    \\--- x:y:3.0\n"
        "\\--- c:d:2.0\n"
        "     \\--- x:y:3.0\n"
    )
    node = _by_key(parse_output(text, Dialect.GRADLE, "app")[0])["x:y"]
    assert node.status is DependencyStatus.RESOLVED
    assert [r.name for r in node.requested_by] == ["b:1.0", "d:2.0"]


def test_maven_line():
    modules = parse_output(
        "+- org.slf4j:slf4j-api:jar:1.7.32:compile", Dialect.MAVEN, "app"
    )
    [node] = modules[0].dependencies
    assert node.resolved_version == "1.7.32"
    assert node.status is DependencyStatus.RESOLVED
    assert node.requested_by == (Requester("Project", "1.7.32", True),)


def test_gradle_sample(gradle_output):
    [module] = parse_output(gradle_output, Dialect.GRADLE, "sample-app")
    deps = _by_key(module)
    assert module.name == "sample-app"
    assert list(deps) == [
        "com.squareup.retrofit2:retrofit",
        "com.squareup.okhttp3:okhttp",
        "com.squareup.okio:okio",
        "org.jetbrains.kotlin:kotlin-stdlib",
        "com.google.code.gson:gson",
        "org.slf4j:slf4j-api",
    ]
    assert module.conflict_count == 3

    okhttp = deps["com.squareup.okhttp3:okhttp"]
    assert okhttp.status is DependencyStatus.CONFLICT
    assert okhttp.requested_version == "3.14.9"
    assert okhttp.resolved_version == "4.9.0"
    assert okhttp.requested_by == (
        Requester("retrofit:2.9.0", "3.14.9", False),
        Requester("Project Root", "4.9.0", True),
    )

    stdlib = deps["org.jetbrains.kotlin:kotlin-stdlib"]
    assert [r.name for r in stdlib.requested_by] == ["okio:2.8.0", "okhttp:4.9.0"]
    assert deps["org.slf4j:slf4j-api"].status is DependencyStatus.RESOLVED


def test_maven_sample(maven_output):
    [module] = parse_output(maven_output, Dialect.MAVEN, "demo")
    assert len(module.dependencies) == 5
    assert module.conflict_count == 0
    assert all(d.status is DependencyStatus.RESOLVED for d in module.dependencies)


def test_maven_duplicates_are_merged():
    text = (
        "+- org.slf4j:slf4j-api:jar:1.7.32:compile\n"
        "\\- org.slf4j:slf4j-api:jar:1.7.32:compile\n"
    )
    [module] = parse_output(text, Dialect.MAVEN, "app")
    [node] = module.dependencies
    assert len(node.requested_by) == 1


def test_parsing_is_idempotent(gradle_output):
    assert parse_output(gradle_output, Dialect.GRADLE, "app") == parse_output(
        gradle_output, Dialect.GRADLE, "app"
    )


def test_arrow_lines_are_conflicts(gradle_output):
    [module] = parse_output(gradle_output, Dialect.GRADLE, "app")
    deps = _by_key(module)
    for key in (
        "com.squareup.okhttp3:okhttp",
        "org.jetbrains.kotlin:kotlin-stdlib",
        "com.google.code.gson:gson",
    ):
        assert deps[key].status is DependencyStatus.CONFLICT
        assert deps[key].requested_version is not None


def test_dedup_invariant(gradle_output):
    [module] = parse_output(gradle_output, Dialect.GRADLE, "app")
    keys = [d.coordinate.key for d in module.dependencies]
    assert len(keys) == len(set(keys))
    for node in module.dependencies:
        pairs = [r.identity for r in node.requested_by]
        assert len(pairs) == len(set(pairs))


def test_truncated_output_is_tolerated(gradle_output):
    truncated = gradle_output + "+--- com.google.code.gson:gs"
    assert parse_output(truncated, Dialect.GRADLE, "app") == parse_output(
        gradle_output, Dialect.GRADLE, "app"
    )


def test_windows_line_endings(gradle_output):
    crlf = gradle_output.replace("\n", "\r\n")
    assert parse_output(crlf, Dialect.GRADLE, "app") == parse_output(
        gradle_output, Dialect.GRADLE, "app"
    )


def test_indent_width_is_configurable():
    text = "+--- a:b:1.0\n|   +--- c:d:2.0\n"
    default = _by_key(parse_output(text, Dialect.GRADLE, "app")[0])
    narrow = _by_key(parse_output(text, Dialect.GRADLE, "app", indent_width=4)[0])
    assert default["c:d"].requested_by[0].name == "Project Root"
    assert narrow["c:d"].requested_by[0].name == "b:1.0"


def test_resolved_versions(gradle_output):
    modules = parse_output(gradle_output, Dialect.GRADLE, "app")
    versions = resolved_versions(modules)
    assert versions["com.google.code.gson:gson"] == "2.8.9"
    assert versions["com.squareup.okhttp3:okhttp"] == "4.9.0"
    assert len(versions) == 6


def test_resolved_versions_uses_last_module():
    first = parse_output("+--- a:b:1.0", Dialect.GRADLE, "one")
    second = parse_output("+--- a:b:2.0", Dialect.GRADLE, "two")
    assert resolved_versions(first + second) == {"a:b": "2.0"}
    assert resolved_versions(()) == {}


def test_result_is_immutable(gradle_output):
    [module] = parse_output(gradle_output, Dialect.GRADLE, "app")
    with pytest.raises(AttributeError):
        module.name = "other"
    assert isinstance(module.dependencies, tuple)


def test_repeated_line_in_second_configuration():
    text = (
        "compileClasspath\n"
        "+--- a:b:1.0\n"
        "\n"
        "runtimeClasspath\n"
        "+--- a:b:1.0 -> 2.0\n"
    )
    [module] = parse_output(text, Dialect.GRADLE, "app")
    [node] = module.dependencies
    assert node.resolved_version == "1.0"
    assert node.requested_version is None
    assert node.status is DependencyStatus.RESOLVED
    assert node.requested_by == (Requester("Project Root", "1.0", True),)
    assert module.conflict_count == 0


def test_rich_version_parent_label():
    text = (
        "+--- org.jetbrains.kotlin:kotlin-stdlib:{strictly 1.8.0} -> 1.8.0\n"
        "|    \\--- org.jetbrains:annotations:13.0\n"
    )
    [module] = parse_output(text, Dialect.GRADLE, "app")
    deps = _by_key(module)
    stdlib = deps["org.jetbrains.kotlin:kotlin-stdlib"]
    assert stdlib.resolved_version == "1.8.0"
    assert stdlib.status is DependencyStatus.RESOLVED
    assert deps["org.jetbrains:annotations"].requested_by[0].name == "kotlin-stdlib:1.8.0"
    assert resolved_versions((module,))["org.jetbrains.kotlin:kotlin-stdlib"] == "1.8.0"
