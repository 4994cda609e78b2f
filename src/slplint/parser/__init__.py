"""Document model builders for SnapLogic pipeline exports.

Two strategies produce the same PipelineDocument: a strict builder that
walks the fully parsed JSON tree, and a fast line scanner for the
pre-commit path. Both run the general-purpose JSON parser first.
"""

from slplint.config import DocumentConfig, ValidationMode
from slplint.parser.document import EdgeRef, PipelineDocument
from slplint.parser.fast import FastLineScanner
from slplint.parser.strict import StrictDocumentBuilder
from slplint.parser.syntax import PairsDict, parse_json, read_source


def build_document(
    text: str,
    source: str = "<string>",
    mode: ValidationMode | str = ValidationMode.FAST,
    config: DocumentConfig | None = None,
) -> PipelineDocument:
    """Build the document model with the requested strategy.

    Raises:
        PipelineSyntaxError: If the text is not well-formed JSON
    """
    if ValidationMode(mode) == ValidationMode.STRICT:
        return StrictDocumentBuilder(config).build(text, source)
    return FastLineScanner(config).build(text, source)


__all__ = [
    "EdgeRef",
    "PipelineDocument",
    "FastLineScanner",
    "StrictDocumentBuilder",
    "PairsDict",
    "build_document",
    "parse_json",
    "read_source",
]
