"""Validation rules for pipeline documents.

Rules run in registration order. Each one checks one structural property of
the extracted document and reports it under its category.
"""

import logging
from collections import Counter

from slplint.config import SlplintConfig
from slplint.exceptions import (
    DanglingReference,
    IdentifierCountMismatch,
    LinkCountMismatch,
    MissingDiscriminator,
    MissingRequiredField,
    NoNodesFound,
)
from slplint.parser.document import PipelineDocument
from .framework import CheckCategory, ValidationResult, ValidationRule

logger = logging.getLogger(__name__)


class DiscriminatorRule(ValidationRule):
    """Validate that the document declares itself a pipeline."""

    @property
    def name(self) -> str:
        return "discriminator"

    @property
    def category(self) -> CheckCategory:
        return CheckCategory.STRUCTURE

    def validate(self, document: PipelineDocument, config: SlplintConfig, result: ValidationResult) -> None:
        key = config.document.discriminator_key
        expected = config.document.discriminator

        if document.discriminator == expected:
            result.ok(self.name, self.category, f"Pipeline {key} found")
            return

        result.fail(
            self.name,
            self.category,
            MissingDiscriminator(
                key,
                expected,
                found=document.discriminator,
                present=document.has_field(key),
            ),
            path=f"$.{key}"
        )


class RequiredFieldsRule(ValidationRule):
    """Validate that mandatory top-level sections are present."""

    @property
    def name(self) -> str:
        return "required_fields"

    @property
    def category(self) -> CheckCategory:
        return CheckCategory.REQUIRED_FIELDS

    def validate(self, document: PipelineDocument, config: SlplintConfig, result: ValidationResult) -> None:
        missing = False
        for field in config.document.required_fields:
            if document.has_field(field):
                result.increment_counter("required_fields_present")
            else:
                missing = True
                result.fail(self.name, self.category, MissingRequiredField(field), path=f"$.{field}")

        if not missing:
            result.ok(self.name, self.category, "All required fields present")


class NodeLinkCountRule(ValidationRule):
    """Validate the snap/link count relationship.

    A pipeline is a chain that branches through multi-output snaps, so N
    snaps need exactly N-1 links. A single snap should have none, but a
    nonzero count there is only advisory.
    """

    @property
    def name(self) -> str:
        return "snap_link_count"

    @property
    def category(self) -> CheckCategory:
        return CheckCategory.STRUCTURE

    def validate(self, document: PipelineDocument, config: SlplintConfig, result: ValidationResult) -> None:
        snap_count = document.node_count
        link_count = document.edge_count
        result.increment_counter("snaps", snap_count)
        result.increment_counter("links", link_count)

        if snap_count > 1:
            expected_links = snap_count - 1
            if link_count == expected_links:
                result.ok(
                    self.name,
                    self.category,
                    f"Snap/link count is consistent ({snap_count} snaps, {link_count} links)"
                )
            else:
                result.fail(
                    self.name,
                    self.category,
                    LinkCountMismatch(expected_links, link_count, snap_count),
                    path=f"$.{config.document.edge_section}"
                )
        elif snap_count == 1:
            if link_count == 0:
                result.ok(self.name, self.category, "Single snap pipeline (no links expected)")
            else:
                logger.info(f"{document.source}: single snap pipeline has {link_count} links")
                result.warn(
                    self.name,
                    self.category,
                    f"Single snap pipeline has {link_count} links (unusual but may be valid)",
                    path=f"$.{config.document.edge_section}"
                )
        else:
            result.fail(self.name, self.category, NoNodesFound(), path=f"$.{config.document.node_section}")


class IdentifierCountRule(ValidationRule):
    """Cross-check snap entries against distinct snap identifiers.

    Catches duplicate snap keys (which a JSON parser silently collapses) and
    keys that do not follow the snap identifier format.
    """

    @property
    def name(self) -> str:
        return "identifier_count"

    @property
    def category(self) -> CheckCategory:
        return CheckCategory.STRUCTURE

    def validate(self, document: PipelineDocument, config: SlplintConfig, result: ValidationResult) -> None:
        expected = document.node_count
        found = len(document.distinct_node_ids)
        result.increment_counter("distinct_uuids", found)

        if expected == found:
            result.ok(self.name, self.category, f"Snap identifiers are distinct ({found} UUIDs)")
            return

        details = []
        duplicates = sorted(k for k, n in Counter(document.node_ids).items() if n > 1)
        if duplicates:
            details.append(f"duplicate UUIDs: {', '.join(duplicates)}")
        if document.malformed_node_keys:
            details.append(
                f"keys not matching the UUID format: {', '.join(document.malformed_node_keys)}"
            )

        result.fail(
            self.name,
            self.category,
            IdentifierCountMismatch(expected, found, "; ".join(details)),
            path=f"$.{config.document.node_section}"
        )


class ReferentialIntegrityRule(ValidationRule):
    """Validate that every link endpoint names an existing snap."""

    @property
    def name(self) -> str:
        return "referential_integrity"

    @property
    def category(self) -> CheckCategory:
        return CheckCategory.REFERENTIAL

    def validate(self, document: PipelineDocument, config: SlplintConfig, result: ValidationResult) -> None:
        known = set(document.node_keys)
        edge_section = config.document.edge_section
        reported: set[str] = set()
        clean = True

        result.increment_counter("referenced_uuids", len(document.referenced_ids))

        for edge in document.edges:
            for endpoint, node_id in (("src_id", edge.src_id), ("dst_id", edge.dst_id)):
                path = f"$.{edge_section}.{edge.link_id}.{endpoint}"
                if node_id is None:
                    clean = False
                    result.fail(self.name, self.category,
                                DanglingReference(None, edge.link_id, endpoint), path=path)
                elif node_id not in known and node_id not in reported:
                    clean = False
                    reported.add(node_id)
                    result.fail(self.name, self.category,
                                DanglingReference(node_id, edge.link_id, endpoint), path=path)

        if clean:
            result.ok(
                self.name,
                self.category,
                f"All UUIDs are consistent between {edge_section} and {config.document.node_section}"
            )


class LayoutRule(ValidationRule):
    """Check render_map entries of snaps with several output views.

    Only structural presence is checked, and only when the document carries
    a layout section at all.
    """

    @property
    def name(self) -> str:
        return "layout"

    @property
    def category(self) -> CheckCategory:
        return CheckCategory.STRUCTURE

    def validate(self, document: PipelineDocument, config: SlplintConfig, result: ValidationResult) -> None:
        if document.layout is None:
            return

        layout_section = config.document.layout_section
        detail_map = document.layout.get("detail_map")
        if not isinstance(detail_map, dict):
            detail_map = {}

        for node in document.nodes:
            if len(node.outputs) < 2:
                continue
            result.increment_counter("multi_output_snaps")
            entry = detail_map.get(node.instance_id)
            path = f"$.{layout_section}.detail_map.{node.instance_id}"
            if not isinstance(entry, dict):
                result.warn(
                    self.name,
                    self.category,
                    f"Snap {node.instance_id} has {len(node.outputs)} output views but no {layout_section} entry",
                    path=path
                )
            elif not isinstance(entry.get("output"), dict):
                result.warn(
                    self.name,
                    self.category,
                    f"Snap {node.instance_id} has {len(node.outputs)} output views but no output layout",
                    path=f"{path}.output"
                )


class NodeDefinitionRule(ValidationRule):
    """Warn about snap entries without a snap type."""

    @property
    def name(self) -> str:
        return "snap_definition"

    @property
    def category(self) -> CheckCategory:
        return CheckCategory.STRUCTURE

    def validate(self, document: PipelineDocument, config: SlplintConfig, result: ValidationResult) -> None:
        node_section = config.document.node_section
        for node in document.nodes:
            if node.class_id is None:
                result.warn(
                    self.name,
                    self.category,
                    f"Snap {node.instance_id} has no class_id",
                    path=f"$.{node_section}.{node.instance_id}.class_id"
                )
