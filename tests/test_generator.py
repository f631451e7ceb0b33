"""Tests for the generation pipeline."""

import json
import shutil
from pathlib import Path

import pytest

from js_test_generator.generator import (
    TestGenerationRequest,
    generate_unit_test,
    resolve_framework,
)


@pytest.fixture
def fixtures_path():
    return Path(__file__).parent / "fixtures" / "sample_sources"


@pytest.fixture
def workspace(tmp_path, fixtures_path):
    """Copy of the sample sources in a temporary project."""
    for source in fixtures_path.iterdir():
        shutil.copy(source, tmp_path / source.name)
    return tmp_path


class TestGenerateUnitTest:
    def given_request(self, path, **kwargs):
        self.request = TestGenerationRequest(file_path=str(path), **kwargs)

    def when_generated(self):
        self.result = generate_unit_test(self.request)

    def then_succeeded(self):
        assert self.result.success is True
        assert self.result.errors == []

    def then_failed_with(self, fragment):
        assert self.result.success is False
        assert self.result.test_code == ""
        assert any(fragment in e for e in self.result.errors)

    def test_writes_jest_test_file(self, workspace):
        """Jest tests are written next to the source with a .test marker."""
        self.given_request(workspace / "math.ts", framework="jest")
        self.when_generated()
        self.then_succeeded()

        written = workspace / "math.test.ts"
        assert self.result.test_file_path == str(written)
        assert written.read_text() == self.result.test_code
        assert self.result.test_code.startswith(
            "import { add, scale, fetchTotal } from './math';\n\n"
        )
        assert "const result = await fetchTotal([], []);" in self.result.test_code
        assert "internalHelper" not in self.result.test_code
        assert self.result.original_code == (workspace / "math.ts").read_text()

    def test_karma_uses_spec_suffix(self, workspace):
        """Karma tests use the .spec marker."""
        self.given_request(workspace / "counter.ts", framework="karma")
        self.when_generated()
        self.then_succeeded()
        assert Path(self.result.test_file_path).name == "counter.spec.ts"
        assert "it('increment should be defined', () => {" in self.result.test_code

    def test_framework_detected_from_package_json(self, workspace):
        """Without an explicit framework the project's framework is used."""
        (workspace / "package.json").write_text(
            json.dumps({"devDependencies": {"karma": "^6.4.0"}})
        )
        self.given_request(workspace / "widget.jsx")
        self.when_generated()
        self.then_succeeded()
        assert self.result.framework == "karma"
        assert self.result.test_file_path.endswith("widget.spec.jsx")

    def test_dry_run_does_not_write(self, workspace):
        """write=False leaves the filesystem untouched."""
        self.given_request(workspace / "math.ts", framework="jest", write=False)
        self.when_generated()
        self.then_succeeded()
        assert not (workspace / "math.test.ts").exists()

    def test_custom_output_path(self, workspace):
        """An explicit output path overrides the naming rule."""
        output = workspace / "__tests__" / "math.ts"
        self.given_request(
            workspace / "math.ts", framework="jest", output_path=str(output)
        )
        self.when_generated()
        self.then_succeeded()
        assert output.exists()

    def test_parse_error_is_reported(self, workspace):
        """Syntax errors become a failed result."""
        self.given_request(workspace / "broken.ts", framework="jest")
        self.when_generated()
        self.then_failed_with("broken.ts")
        assert not (workspace / "broken.test.ts").exists()

    def test_unsupported_framework_is_reported(self, workspace):
        """Unknown frameworks become a failed result."""
        self.given_request(workspace / "math.ts", framework="mocha")
        self.when_generated()
        self.then_failed_with("mocha")

    def test_missing_file_is_reported(self, tmp_path):
        """Missing source files become a failed result."""
        self.given_request(tmp_path / "missing.ts", framework="jest")
        self.when_generated()
        self.then_failed_with("missing.ts")

    def test_latin1_source_is_generated(self, workspace):
        """Bytes that are not UTF-8 are replaced rather than failing the run."""
        self.given_request(workspace / "latin1.js", framework="jest")
        self.when_generated()
        self.then_succeeded()
        assert "\ufffd" in self.result.original_code
        assert "const result = convert({}, {});" in self.result.test_code
        assert (workspace / "latin1.test.js").exists()

    def test_result_serializes_to_json(self, workspace):
        """Results serialize to JSON."""
        self.given_request(workspace / "math.ts", framework="jest", write=False)
        self.when_generated()
        parsed = json.loads(self.result.to_json())
        assert parsed["success"] is True
        assert parsed["framework"] == "jest"


class TestResolveFramework:
    """Tests for resolve_framework function."""

    def test_explicit_framework_wins(self, tmp_path):
        """A requested framework is used as is."""
        assert resolve_framework(str(tmp_path / "a.ts"), "jasmine") == "jasmine"

    def test_angular_defaults_to_karma(self, tmp_path):
        """Angular projects without a framework get Karma."""
        (tmp_path / "package.json").write_text(
            json.dumps({"dependencies": {"@angular/core": "^17.0.0"}})
        )
        source = tmp_path / "app.component.ts"
        source.write_text("")

        assert resolve_framework(str(source), None) == "karma"
