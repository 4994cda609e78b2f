"""Tests for validation framework core functionality."""

import pytest

from slplint.config import SlplintConfig, ValidationConfig, ValidationMode
from slplint.exceptions import LinkCountMismatch
from slplint.parser import StrictDocumentBuilder
from slplint.validation import (
    CheckCategory,
    DiscriminatorRule,
    IdentifierCountRule,
    LayoutRule,
    NodeDefinitionRule,
    NodeLinkCountRule,
    ReferentialIntegrityRule,
    RequiredFieldsRule,
    ValidationFramework,
    ValidationIssue,
    ValidationResult,
    ValidationRule,
    ValidationStatus,
)


@pytest.fixture
def sample_config():
    """Sample configuration for testing."""
    return SlplintConfig()


@pytest.fixture
def document(pipeline_text):
    return StrictDocumentBuilder().build(pipeline_text, "customer_sync.slp")


class TestValidationResult:
    """Test ValidationResult functionality."""

    def test_initial_state(self):
        result = ValidationResult()
        assert result.status == ValidationStatus.PASS
        assert result.issues == []
        assert result.exit_code == 0

    def test_status_escalation(self):
        result = ValidationResult()

        result.warn("test_rule", CheckCategory.STRUCTURE, "Test warning")
        assert result.status == ValidationStatus.WARN
        assert result.exit_code == 0

        result.fail("test_rule", CheckCategory.STRUCTURE, LinkCountMismatch(2, 1, 3))
        assert result.status == ValidationStatus.FAIL
        assert result.exit_code == 1

        result.warn("test_rule", CheckCategory.STRUCTURE, "Another warning")
        assert result.status == ValidationStatus.FAIL

    def test_fail_records_error_kind(self):
        result = ValidationResult()
        result.fail("snap_link_count", CheckCategory.STRUCTURE, LinkCountMismatch(2, 1, 3), path="$.link_map")

        issue = result.errors[0]
        assert issue.kind == "LinkCountMismatch"
        assert issue.path == "$.link_map"
        assert "3 snaps should have 2 links, found 1" in issue.message

    def test_fail_fast_raises(self):
        result = ValidationResult(fail_fast=True)
        with pytest.raises(LinkCountMismatch):
            result.fail("snap_link_count", CheckCategory.STRUCTURE, LinkCountMismatch(2, 1, 3))

    def test_counters(self):
        result = ValidationResult()
        result.increment_counter("snaps")
        result.increment_counter("snaps", 4)
        assert result.counters["snaps"] == 5

    def test_category_status(self):
        result = ValidationResult()
        result.ok("discriminator", CheckCategory.STRUCTURE, "ok")
        result.fail("referential_integrity", CheckCategory.REFERENTIAL, LinkCountMismatch(1, 0, 2))
        result.skipped.add(CheckCategory.REQUIRED_FIELDS)

        assert result.category_status(CheckCategory.STRUCTURE) == "passed"
        assert result.category_status(CheckCategory.REFERENTIAL) == "failed"
        assert result.category_status(CheckCategory.REQUIRED_FIELDS) == "skipped"

    def test_to_dict(self):
        result = ValidationResult()
        result.warn("layout", CheckCategory.STRUCTURE, "Test warning", path="$.render_map")
        result.increment_counter("snaps", 3)

        data = result.to_dict()
        assert data["status"] == "warn"
        assert data["exit_code"] == 0
        assert data["counters"] == {"snaps": 3}
        assert data["issues"][0]["kind"] == "AdvisoryWarning"
        assert data["issues"][0]["category"] == "structure"

    def test_issue_str(self):
        issue = ValidationIssue("layout", ValidationStatus.WARN, "No layout", CheckCategory.STRUCTURE, path="$.x")
        assert str(issue) == "[WARN] layout: No layout at $.x"


class TestValidationFramework:
    """Test ValidationFramework functionality."""

    def test_default_rule_order_strict(self, sample_config):
        framework = ValidationFramework(sample_config)
        framework.create_default_rules(ValidationMode.STRICT)

        assert [type(rule) for rule in framework.rules] == [
            DiscriminatorRule,
            NodeLinkCountRule,
            IdentifierCountRule,
            ReferentialIntegrityRule,
            RequiredFieldsRule,
            LayoutRule,
            NodeDefinitionRule,
        ]

    def test_default_rules_fast(self, sample_config):
        framework = ValidationFramework(sample_config)
        framework.create_default_rules(ValidationMode.FAST)

        assert [rule.name for rule in framework.rules] == [
            "discriminator",
            "snap_link_count",
            "identifier_count",
            "referential_integrity",
            "required_fields",
        ]

    def test_fast_rules_without_referential_check(self):
        config = SlplintConfig(validation=ValidationConfig(fast_referential_check=False))
        framework = ValidationFramework(config)
        framework.create_default_rules("fast")

        assert "referential_integrity" not in [rule.name for rule in framework.rules]

    def test_layout_rule_disabled(self):
        config = SlplintConfig(validation=ValidationConfig(check_layout=False))
        framework = ValidationFramework(config)
        framework.create_default_rules("strict")

        assert "layout" not in [rule.name for rule in framework.rules]

    def test_validate_passing_document(self, sample_config, document):
        framework = ValidationFramework(sample_config)
        framework.create_default_rules()

        result = framework.validate(document)
        assert result.status == ValidationStatus.PASS
        assert result.counters["snaps"] == 3
        assert result.counters["links"] == 2

    def test_rule_crash_is_recorded(self, sample_config, document):
        class BrokenRule(ValidationRule):
            @property
            def name(self) -> str:
                return "broken"

            @property
            def category(self) -> CheckCategory:
                return CheckCategory.STRUCTURE

            def validate(self, document, config, result):
                raise RuntimeError("boom")

        framework = ValidationFramework(sample_config)
        framework.add_rule(BrokenRule())
        framework.add_rule(NodeLinkCountRule())

        result = framework.validate(document)
        assert result.status == ValidationStatus.FAIL
        assert result.errors[0].message == "Rule execution failed: boom"
        assert result.counters["snaps"] == 3
