"""Shared fixtures for depinspector tests."""

from pathlib import Path

import pytest

GRADLE_OUTPUT = """\
runtimeClasspath - Runtime classpath of source set 'main'.
+--- com.squareup.retrofit2:retrofit:2.9.0
|    \\--- com.squareup.okhttp3:okhttp:3.14.9 -> 4.9.0
|         +--- com.squareup.okio:okio:2.8.0
|         |    \\--- org.jetbrains.kotlin:kotlin-stdlib:1.4.10 -> 1.6.0
|         \\--- org.jetbrains.kotlin:kotlin-stdlib:1.4.10 -> 1.6.0
+--- com.google.code.gson:gson:2.8.6 -> 2.8.9
+--- com.squareup.okhttp3:okhttp:4.9.0 (*)
\\--- org.slf4j:slf4j-api:1.7.32

(*) - dependencies omitted (listed previously)
"""

MAVEN_OUTPUT = """\
[INFO] com.example:demo:jar:1.0-SNAPSHOT
[INFO] +- org.slf4j:slf4j-api:jar:1.7.32:compile
[INFO] +- com.google.guava:guava:jar:31.0-jre:compile
[INFO] |  +- com.google.guava:failureaccess:jar:1.0.1:compile
[INFO] |  \\- com.google.code.findbugs:jsr305:jar:3.0.2:compile
[INFO] \\- org.junit.jupiter:junit-jupiter:jar:5.8.2:test
"""


@pytest.fixture
def gradle_output() -> str:
    return GRADLE_OUTPUT


@pytest.fixture
def maven_output() -> str:
    return MAVEN_OUTPUT


@pytest.fixture
def gradle_project(tmp_path: Path) -> Path:
    """A minimal Gradle project directory."""
    (tmp_path / "build.gradle.kts").write_text('plugins { java }\n')
    (tmp_path / "settings.gradle.kts").write_text('rootProject.name = "sample-app"\n')
    return tmp_path


@pytest.fixture
def maven_project(tmp_path: Path) -> Path:
    (tmp_path / "pom.xml").write_text("<project/>\n")
    return tmp_path
