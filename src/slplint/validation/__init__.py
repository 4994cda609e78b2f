"""Structural validation of SnapLogic pipeline documents.

One rule set, two ways of consuming it: the fast path stops at the first
failure, the comprehensive path collects everything for a report.
"""

from .engine import check_file, check_pipeline, validate_file, validate_pipeline
from .report import PipelineReport
from .framework import (
    CheckCategory,
    ValidationFramework,
    ValidationIssue,
    ValidationResult,
    ValidationRule,
    ValidationStatus,
)
from .rules import (
    DiscriminatorRule,
    IdentifierCountRule,
    LayoutRule,
    NodeDefinitionRule,
    NodeLinkCountRule,
    ReferentialIntegrityRule,
    RequiredFieldsRule,
)

__all__ = [
    "check_file",
    "check_pipeline",
    "validate_file",
    "validate_pipeline",
    "PipelineReport",
    "CheckCategory",
    "ValidationFramework",
    "ValidationIssue",
    "ValidationResult",
    "ValidationRule",
    "ValidationStatus",
    "DiscriminatorRule",
    "RequiredFieldsRule",
    "NodeLinkCountRule",
    "IdentifierCountRule",
    "ReferentialIntegrityRule",
    "LayoutRule",
    "NodeDefinitionRule",
]
