"""Rich console transcript for comprehensive validation reports."""

from rich.console import Console
from rich.markup import escape

from slplint.validation import CheckCategory, PipelineReport, ValidationStatus

CATEGORY_HEADINGS = {
    CheckCategory.SYNTAX: "Validating JSON syntax...",
    CheckCategory.STRUCTURE: "Validating SnapLogic pipeline structure...",
    CheckCategory.REFERENTIAL: "Validating UUID consistency...",
    CheckCategory.REQUIRED_FIELDS: "Validating required pipeline fields...",
}

# Counters shown as verbose detail lines under each category
VERBOSE_COUNTERS = {
    CheckCategory.STRUCTURE: [
        ("snaps", "Found {} snap(s)"),
        ("links", "Found {} link(s)"),
        ("distinct_uuids", "Found {} distinct snap UUID(s)"),
        ("multi_output_snaps", "Checked layout of {} multi-output snap(s)"),
    ],
    CheckCategory.REFERENTIAL: [
        ("referenced_uuids", "Validated {} unique UUIDs"),
    ],
    CheckCategory.REQUIRED_FIELDS: [
        ("required_fields_present", "Found {} required field(s)"),
    ],
}


class ReportRenderer:
    """Renders a PipelineReport as a colorized transcript.

    Errors always go to the error console. Quiet mode prints nothing else
    except the final failure verdict; verbose mode adds detail lines.
    """

    def __init__(self, console: Console | None = None, err_console: Console | None = None,
                 verbose: bool = False, quiet: bool = False):
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True)
        self.verbose = verbose and not quiet
        self.quiet = quiet

    def render(self, report: PipelineReport) -> None:
        result = report.result

        self._out(f"🔍 Validating SnapLogic pipeline: {escape(report.file)}")
        self._out("")

        for category in CheckCategory:
            if category in result.skipped:
                continue

            self._out(f"[blue]ℹ[/blue] {CATEGORY_HEADINGS[category]}")
            for issue in result.issues:
                if issue.category != category:
                    continue
                message = escape(issue.message)
                if issue.severity == ValidationStatus.FAIL:
                    self.err_console.print(f"[red]❌[/red] {message}", soft_wrap=True)
                elif issue.severity == ValidationStatus.WARN:
                    self._out(f"[yellow]⚠[/yellow] {message}")
                else:
                    self._out(f"[green]✅[/green] {message}")

            if self.verbose:
                for counter, template in VERBOSE_COUNTERS.get(category, []):
                    if counter in result.counters:
                        self.console.print(
                            f"[blue]  →[/blue] {template.format(result.counters[counter])}",
                            soft_wrap=True
                        )

        self._out("")
        if report.passed:
            self._out("[green]✅[/green] Pipeline validation passed! ✨")
            if report.warning_count:
                self._out(f"[yellow]Note: {report.warning_count} warning(s) found[/yellow]")
        else:
            self.console.print("[red]Pipeline validation failed![/red]")
            self.console.print(
                f"[red]Errors: {report.error_count}, Warnings: {report.warning_count}[/red]"
            )

    def _out(self, text: str) -> None:
        if not self.quiet:
            self.console.print(text, soft_wrap=True)
