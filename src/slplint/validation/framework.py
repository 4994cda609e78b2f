"""Core validation framework for pipeline documents.

One set of pluggable rules serves both validation paths. The fast path runs
them with ``fail_fast`` set, so the first failing issue raises its error;
the comprehensive path collects every issue for reporting.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum

from slplint.config import SlplintConfig, ValidationMode
from slplint.exceptions import PipelineValidationError
from slplint.parser.document import PipelineDocument

logger = logging.getLogger(__name__)


class ValidationStatus(str, Enum):
    """Validation status of a single issue or a whole run."""
    PASS = "pass"
    WARN = "warn"
    FAIL = "fail"


class CheckCategory(str, Enum):
    """Independent check categories of the comprehensive report."""
    SYNTAX = "syntax"
    STRUCTURE = "structure"
    REFERENTIAL = "referential"
    REQUIRED_FIELDS = "required_fields"


ADVISORY_KIND = "AdvisoryWarning"


@dataclass
class ValidationIssue:
    """A single finding; PASS issues record checks that succeeded."""
    rule: str
    severity: ValidationStatus
    message: str
    category: CheckCategory
    kind: str | None = None
    path: str | None = None

    def __str__(self) -> str:
        location = f" at {self.path}" if self.path else ""
        return f"[{self.severity.value.upper()}] {self.rule}: {self.message}{location}"


@dataclass
class ValidationResult:
    """Results of a validation run."""
    status: ValidationStatus = ValidationStatus.PASS
    issues: list[ValidationIssue] = field(default_factory=list)
    counters: dict[str, int] = field(default_factory=dict)
    skipped: set[CheckCategory] = field(default_factory=set)
    fail_fast: bool = False

    @property
    def exit_code(self) -> int:
        """Exit code for hooks and CI: 0 = pass/warn, 1 = fail."""
        return 0 if self.status != ValidationStatus.FAIL else 1

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == ValidationStatus.FAIL]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == ValidationStatus.WARN]

    def add_issue(self, rule: str, severity: ValidationStatus, message: str,
                  category: CheckCategory, kind: str | None = None,
                  path: str | None = None) -> ValidationIssue:
        """Add a validation issue."""
        issue = ValidationIssue(rule, severity, message, category, kind, path)
        self.issues.append(issue)

        # Update overall status (fail > warn > pass)
        if severity == ValidationStatus.FAIL:
            self.status = ValidationStatus.FAIL
        elif severity == ValidationStatus.WARN and self.status == ValidationStatus.PASS:
            self.status = ValidationStatus.WARN
        return issue

    def fail(self, rule: str, category: CheckCategory, error: PipelineValidationError,
             path: str | None = None) -> None:
        """Record a failure; in fail-fast mode the error is raised instead of collected."""
        self.add_issue(rule, ValidationStatus.FAIL, error.message, category, error.kind, path)
        if self.fail_fast:
            raise error

    def warn(self, rule: str, category: CheckCategory, message: str,
             path: str | None = None) -> None:
        self.add_issue(rule, ValidationStatus.WARN, message, category, ADVISORY_KIND, path)

    def ok(self, rule: str, category: CheckCategory, message: str) -> None:
        self.add_issue(rule, ValidationStatus.PASS, message, category)

    def increment_counter(self, name: str, value: int = 1) -> None:
        """Increment a counter."""
        self.counters[name] = self.counters.get(name, 0) + value

    def category_status(self, category: CheckCategory) -> str:
        """Per-category verdict: passed, failed or skipped."""
        if category in self.skipped:
            return "skipped"
        if any(i.category == category for i in self.errors):
            return "failed"
        return "passed"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            "status": self.status.value,
            "exit_code": self.exit_code,
            "counters": self.counters,
            "issues": [
                {
                    "rule": issue.rule,
                    "severity": issue.severity.value,
                    "message": issue.message,
                    "category": issue.category.value,
                    "kind": issue.kind,
                    "path": issue.path
                }
                for issue in self.issues
            ]
        }


class ValidationRule(ABC):
    """Base class for validation rules."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Rule name for identification."""
        pass

    @property
    @abstractmethod
    def category(self) -> CheckCategory:
        """Report category the rule contributes to."""
        pass

    @abstractmethod
    def validate(self, document: PipelineDocument, config: SlplintConfig,
                 result: ValidationResult) -> None:
        """Execute validation rule.

        Args:
            document: Extracted pipeline document
            config: slplint configuration
            result: Validation result to update with issues/counters
        """
        pass


class ValidationFramework:
    """Runs the rule set against a pipeline document."""

    def __init__(self, config: SlplintConfig):
        self.config = config
        self.rules: list[ValidationRule] = []

    def add_rule(self, rule: ValidationRule) -> None:
        """Add a validation rule."""
        self.rules.append(rule)

    def validate(self, document: PipelineDocument, fail_fast: bool = False,
                 result: ValidationResult | None = None) -> ValidationResult:
        """Run validation on an extracted document.

        Args:
            document: Extracted pipeline document
            fail_fast: Raise the first failure instead of collecting issues
            result: Optional result to extend (e.g. one carrying syntax issues)

        Returns:
            ValidationResult with status, issues, and counters

        Raises:
            PipelineValidationError: First failure, when fail_fast is set
        """
        if result is None:
            result = ValidationResult()
        result.fail_fast = fail_fast

        logger.debug(f"Validating {document.source} with {len(self.rules)} rules")

        for rule in self.rules:
            logger.debug(f"Executing rule: {rule.name}")
            if fail_fast:
                rule.validate(document, self.config, result)
                continue
            try:
                rule.validate(document, self.config, result)
            except Exception as e:
                logger.error(f"Rule {rule.name} failed with error: {e}")
                result.add_issue(
                    rule.name,
                    ValidationStatus.FAIL,
                    f"Rule execution failed: {e}",
                    rule.category
                )

        logger.debug(f"Validation of {document.source} completed with status: {result.status.value}")
        return result

    def create_default_rules(self, mode: ValidationMode | str = ValidationMode.STRICT) -> None:
        """Register the rules in their fixed evaluation order."""
        from .rules import (
            DiscriminatorRule,
            IdentifierCountRule,
            LayoutRule,
            NodeDefinitionRule,
            NodeLinkCountRule,
            ReferentialIntegrityRule,
            RequiredFieldsRule,
        )

        mode = ValidationMode(mode)

        self.add_rule(DiscriminatorRule())
        self.add_rule(NodeLinkCountRule())
        self.add_rule(IdentifierCountRule())
        if mode == ValidationMode.STRICT or self.config.validation.fast_referential_check:
            self.add_rule(ReferentialIntegrityRule())
        # Structural failures take precedence over missing top-level fields
        self.add_rule(RequiredFieldsRule())
        if mode == ValidationMode.STRICT:
            if self.config.validation.check_layout:
                self.add_rule(LayoutRule())
            self.add_rule(NodeDefinitionRule())
