"""Machine-readable report of a comprehensive validation run."""

from dataclasses import dataclass

from .framework import CheckCategory, ValidationResult, ValidationStatus

SUMMARY_KEYS = {
    CheckCategory.SYNTAX: "json_syntax",
    CheckCategory.STRUCTURE: "pipeline_structure",
    CheckCategory.REFERENTIAL: "uuid_consistency",
    CheckCategory.REQUIRED_FIELDS: "required_fields",
}


@dataclass
class PipelineReport:
    """Comprehensive validation outcome for one pipeline file."""
    file: str
    result: ValidationResult

    @property
    def passed(self) -> bool:
        return self.error_count == 0

    @property
    def status(self) -> str:
        return "success" if self.passed else "failed"

    @property
    def exit_code(self) -> int:
        """0 iff there are no errors; warnings never fail a run."""
        return 0 if self.passed else 1

    @property
    def error_count(self) -> int:
        return len(self.result.errors)

    @property
    def warning_count(self) -> int:
        return len(self.result.warnings)

    @property
    def validation_results(self) -> list[str]:
        """Errors and warnings in the order they were found."""
        lines = []
        for issue in self.result.issues:
            if issue.severity == ValidationStatus.FAIL:
                lines.append(f"ERROR: {issue.message}")
            elif issue.severity == ValidationStatus.WARN:
                lines.append(f"WARNING: {issue.message}")
        return lines

    @property
    def summary(self) -> dict[str, str]:
        return {key: self.result.category_status(category) for category, key in SUMMARY_KEYS.items()}

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            "file": self.file,
            "status": self.status,
            "error_count": self.error_count,
            "warning_count": self.warning_count,
            "validation_results": self.validation_results,
            "summary": self.summary,
        }
