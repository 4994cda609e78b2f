"""Tests for the fast and comprehensive validation entry points."""

import json

import pytest

from conftest import make_pipeline, snap_id
from slplint.config import SlplintConfig, ValidationConfig
from slplint.exceptions import (
    DanglingReference,
    IdentifierCountMismatch,
    LinkCountMismatch,
    MissingRequiredField,
    NoNodesFound,
    PipelineSyntaxError,
    PipelineValidationError,
)
from slplint.validation import (
    ValidationStatus,
    check_file,
    check_pipeline,
    validate_file,
    validate_pipeline,
)


def dumps(pipeline):
    return json.dumps(pipeline, indent=4)


class TestCheckPipeline:
    """Fast path: first failure raises."""

    def test_valid_pipeline_is_silent(self, pipeline_text):
        result = check_pipeline(pipeline_text)
        assert result.status == ValidationStatus.PASS
        assert result.errors == []

    @pytest.mark.parametrize("link_count,passes", [(2, True), (1, False), (3, False)])
    def test_link_count_relationship(self, link_count, passes):
        text = dumps(make_pipeline(3, link_count))
        if passes:
            check_pipeline(text)
        else:
            with pytest.raises(LinkCountMismatch):
                check_pipeline(text)

    def test_single_snap(self):
        assert check_pipeline(dumps(make_pipeline(1))).status == ValidationStatus.PASS

        pipeline = make_pipeline(1, 1)
        pipeline["link_map"]["link0"]["dst_id"] = snap_id(0)
        assert check_pipeline(dumps(pipeline)).status == ValidationStatus.WARN

    @pytest.mark.parametrize("link_count", [0, 2])
    def test_no_snaps(self, link_count):
        pipeline = make_pipeline(0)
        pipeline["link_map"] = make_pipeline(3, link_count)["link_map"]
        with pytest.raises(NoNodesFound):
            check_pipeline(dumps(pipeline))

    def test_missing_discriminator_wins(self):
        pipeline = make_pipeline(3, 0)
        del pipeline["class_id"]
        with pytest.raises(MissingRequiredField):
            check_pipeline(dumps(pipeline))

    def test_link_count_reported_before_missing_field(self):
        pipeline = make_pipeline(3, 1)
        del pipeline["property_map"]
        with pytest.raises(LinkCountMismatch):
            check_pipeline(dumps(pipeline))

    def test_no_snaps_reported_before_missing_field(self):
        pipeline = make_pipeline(0)
        del pipeline["class_version"]
        with pytest.raises(NoNodesFound):
            check_pipeline(dumps(pipeline))

    def test_missing_field_after_structure_passes(self, pipeline):
        del pipeline["class_version"]
        with pytest.raises(MissingRequiredField, match="class_version"):
            check_pipeline(dumps(pipeline))

    def test_syntax_error(self, pipeline_text):
        with pytest.raises(PipelineSyntaxError):
            check_pipeline(pipeline_text[:-2])

    def test_duplicate_snap_key(self):
        text = dumps(make_pipeline(3)).replace(snap_id(2), snap_id(1), 1)
        # The link still names snap 2, but the duplicate is found first
        with pytest.raises(IdentifierCountMismatch):
            check_pipeline(text)

    def test_dangling_reference(self, pipeline):
        pipeline["link_map"]["link1"]["dst_id"] = snap_id(7)
        with pytest.raises(DanglingReference) as exc_info:
            check_pipeline(dumps(pipeline))
        assert exc_info.value.node_id == snap_id(7)

    def test_dangling_reference_check_disabled(self, pipeline):
        pipeline["link_map"]["link1"]["dst_id"] = snap_id(7)
        config = SlplintConfig(validation=ValidationConfig(fast_referential_check=False))
        assert check_pipeline(dumps(pipeline), config=config).exit_code == 0

    def test_adding_referenced_snap_fixes_link(self, pipeline):
        pipeline["link_map"]["link1"]["dst_id"] = snap_id(7)
        pipeline["snap_map"][snap_id(7)] = pipeline["snap_map"].pop(snap_id(2))
        check_pipeline(dumps(pipeline))

    def test_check_file(self, pipeline_file):
        assert check_file(pipeline_file).exit_code == 0

    def test_check_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            check_file(tmp_path / "nope.slp")


class TestValidatePipeline:
    """Comprehensive path: every finding is collected."""

    def test_valid_pipeline(self, pipeline_text):
        report = validate_pipeline(pipeline_text, "customer_sync.slp")

        assert report.passed
        assert report.exit_code == 0
        assert report.to_dict() == {
            "file": "customer_sync.slp",
            "status": "success",
            "error_count": 0,
            "warning_count": 0,
            "validation_results": [],
            "summary": {
                "json_syntax": "passed",
                "pipeline_structure": "passed",
                "uuid_consistency": "passed",
                "required_fields": "passed",
            },
        }

    def test_collects_every_error(self, pipeline):
        del pipeline["class_id"]
        del pipeline["class_version"]
        pipeline["link_map"]["link2"] = {"src_id": snap_id(2), "dst_id": snap_id(8)}
        report = validate_pipeline(dumps(pipeline))

        assert report.exit_code == 1
        assert report.error_count == 4
        assert report.validation_results == [
            "ERROR: Missing pipeline class_id: com-snaplogic-pipeline",
            "ERROR: Snap/link count mismatch: 3 snaps should have 2 links, found 3",
            f"ERROR: UUID {snap_id(8)} referenced in link_map but not found in snap_map",
            "ERROR: Missing required field: class_version",
        ]
        assert report.summary == {
            "json_syntax": "passed",
            "pipeline_structure": "failed",
            "uuid_consistency": "failed",
            "required_fields": "failed",
        }

    def test_warnings_do_not_fail(self):
        pipeline = make_pipeline(1, 1)
        pipeline["link_map"]["link0"]["dst_id"] = snap_id(0)
        report = validate_pipeline(dumps(pipeline))

        assert report.passed
        assert report.status == "success"
        assert report.warning_count == 1
        assert report.validation_results[0].startswith("WARNING: Single snap pipeline has 1 links")

    def test_syntax_error_skips_structure(self):
        report = validate_pipeline('{"class_id": "com-snaplogic-pipeline",', "broken.slp")

        assert report.error_count == 1
        assert report.result.errors[0].kind == "SyntaxError"
        assert report.summary == {
            "json_syntax": "failed",
            "pipeline_structure": "skipped",
            "uuid_consistency": "skipped",
            "required_fields": "skipped",
        }

    def test_idempotent(self, pipeline):
        pipeline["link_map"]["link0"]["src_id"] = snap_id(5)
        text = dumps(pipeline)

        assert validate_pipeline(text).to_dict() == validate_pipeline(text).to_dict()

    def test_validate_file(self, pipeline_file):
        report = validate_file(pipeline_file)
        assert report.file == str(pipeline_file)
        assert report.passed

    def test_validate_file_invalid_utf8(self, tmp_path):
        path = tmp_path / "bad.slp"
        path.write_bytes(b"\xff\xfe{}")
        report = validate_file(path)

        assert report.summary["json_syntax"] == "failed"
        assert report.file == str(path)

    def test_validate_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            validate_file(tmp_path / "nope.slp")


class TestPathAgreement:
    """Whatever the fast path rejects, the comprehensive path rejects too."""

    @pytest.mark.parametrize("mutate", [
        lambda p: p.pop("class_id"),
        lambda p: p.pop("property_map"),
        lambda p: p["link_map"].pop("link1"),
        lambda p: p.update(snap_map={}),
        lambda p: p["snap_map"].update(mapper=p["snap_map"].pop(snap_id(2))),
        lambda p: p["link_map"]["link1"].update(dst_id=snap_id(9)),
    ])
    def test_fatal_cases_agree(self, pipeline, mutate):
        mutate(pipeline)
        text = dumps(pipeline)

        with pytest.raises(PipelineValidationError) as exc_info:
            check_pipeline(text)

        report = validate_pipeline(text)
        assert not report.passed
        assert exc_info.value.kind in {issue.kind for issue in report.result.errors}
