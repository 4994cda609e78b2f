"""Entry points for the fast and comprehensive validation paths.

Every function here is a pure function of its input document and config;
nothing is cached between calls.
"""

import logging
from pathlib import Path

from slplint.config import SlplintConfig, ValidationMode, create_default_config
from slplint.exceptions import PipelineSyntaxError
from slplint.parser import FastLineScanner, StrictDocumentBuilder, read_source
from .framework import (
    CheckCategory,
    ValidationFramework,
    ValidationResult,
    ValidationStatus,
)
from .report import PipelineReport

logger = logging.getLogger(__name__)

SYNTAX_RULE = "json_syntax"


def check_pipeline(text: str, source: str = "<string>",
                   config: SlplintConfig | None = None) -> ValidationResult:
    """Fast path: scan the document and stop at the first failure.

    Returns:
        ValidationResult of a passing document (warnings included)

    Raises:
        PipelineValidationError: The first failing check
    """
    config = config or create_default_config()
    document = FastLineScanner(config.document).build(text, source)

    framework = ValidationFramework(config)
    framework.create_default_rules(ValidationMode.FAST)
    return framework.validate(document, fail_fast=True)


def check_file(path: str | Path, config: SlplintConfig | None = None) -> ValidationResult:
    """Fast path over a file, or stdin for "-"."""
    text, source = read_source(path)
    return check_pipeline(text, source, config)


def validate_pipeline(text: str, source: str = "<string>",
                      config: SlplintConfig | None = None) -> PipelineReport:
    """Comprehensive path: run every check and collect all findings."""
    config = config or create_default_config()

    try:
        document = StrictDocumentBuilder(config.document).build(text, source)
    except PipelineSyntaxError as e:
        return _syntax_failure(source, e)

    result = ValidationResult()
    result.ok(SYNTAX_RULE, CheckCategory.SYNTAX, "JSON syntax is valid")

    framework = ValidationFramework(config)
    framework.create_default_rules(ValidationMode.STRICT)
    framework.validate(document, fail_fast=False, result=result)

    logger.info(
        f"{source}: {len(result.errors)} error(s), {len(result.warnings)} warning(s)"
    )
    return PipelineReport(file=source, result=result)


def validate_file(path: str | Path, config: SlplintConfig | None = None) -> PipelineReport:
    """Comprehensive path over a file, or stdin for "-".

    Raises:
        FileNotFoundError: If the file does not exist
        OSError: If the file cannot be read
    """
    try:
        text, source = read_source(path)
    except PipelineSyntaxError as e:
        return _syntax_failure(str(path), e)
    return validate_pipeline(text, source, config)


def _syntax_failure(source: str, error: PipelineSyntaxError) -> PipelineReport:
    """Report for unparseable input; no structural check runs against it."""
    result = ValidationResult()
    result.add_issue(SYNTAX_RULE, ValidationStatus.FAIL, error.message,
                     CheckCategory.SYNTAX, error.kind)
    result.skipped.update({
        CheckCategory.STRUCTURE,
        CheckCategory.REFERENTIAL,
        CheckCategory.REQUIRED_FIELDS,
    })
    logger.info(f"{source}: {error.message}")
    return PipelineReport(file=source, result=result)
