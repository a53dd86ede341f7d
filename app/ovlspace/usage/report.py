"""Status report for the overlay.

Builds the human-readable usage report shown by ``status``, after a
cleanup or relocation, and in the interactive menu.
"""

from dataclasses import dataclass, field
from pathlib import Path

from ovlspace.core.config import OverlayConfig, Thresholds
from ovlspace.usage.classifier import classify
from ovlspace.usage.heavy import HeavyPath, find_heavy_paths
from ovlspace.usage.models import SeverityLevel, UsageSnapshot
from ovlspace.usage.probe import UsageProbe
from ovlspace.utils.formatting import format_size_kb

RULE = "-" * 54


@dataclass(frozen=True, slots=True)
class StatusReport:
    """Everything the status screen shows.

    Attributes:
        mount_point: Mount point that was probed.
        snapshot: Usage statistics.
        thresholds: Thresholds the severity was derived from.
        heavy_root: Directory the heavy paths were measured under.
        heavy_paths: Largest directories, biggest first.
    """

    mount_point: Path
    snapshot: UsageSnapshot
    thresholds: Thresholds
    heavy_root: Path | None = None
    heavy_paths: list[HeavyPath] = field(default_factory=list)

    @property
    def severity(self) -> SeverityLevel:
        return classify(self.snapshot.percent_used, self.thresholds)


def build_status_report(
    config: OverlayConfig,
    probe: UsageProbe | None = None,
    *,
    include_heavy: bool = True,
) -> StatusReport:
    """Probe the overlay and assemble a status report.

    Args:
        config: Active configuration.
        probe: Probe to use. Defaults to one for the configured mount point.
        include_heavy: Measure the heaviest directories as well.

    Returns:
        A fresh StatusReport.

    Raises:
        ProbeUnavailableError: If usage cannot be obtained.
    """
    probe = probe or UsageProbe(config.mount_point)
    snapshot = probe.probe()
    settings = config.heavy_paths
    heavy = (
        find_heavy_paths(settings.root, settings.depth, settings.limit) if include_heavy else []
    )
    return StatusReport(
        mount_point=config.mount_point,
        snapshot=snapshot,
        thresholds=config.thresholds,
        heavy_root=settings.root if include_heavy else None,
        heavy_paths=heavy,
    )


def severity_message(report: StatusReport) -> str:
    """One-line verdict on the overlay usage."""
    severity = report.severity
    if severity is SeverityLevel.CRITICAL:
        return "CRITICAL: Overlay is almost FULL."
    if severity is SeverityLevel.WARNING:
        return f"WARNING: Overlay usage is high (>= {report.thresholds.warn_percent}%)."
    if severity is SeverityLevel.OK:
        return "OK: Overlay usage is fine."
    raw = report.snapshot.capacity
    if raw:
        return f"NOTE: Cannot parse usage percent ({raw})."
    return "NOTE: Cannot parse usage percent."


def usage_lines(report: StatusReport) -> list[str]:
    """Header and statistics lines of the report."""
    snap = report.snapshot
    if snap.percent_used is not None:
        usage = f"{snap.percent_used}%"
    else:
        usage = snap.capacity or "-"
    return [
        f"Writable layer (overlay) - mount: {report.mount_point}",
        RULE,
        f"Filesystem : {snap.filesystem}",
        f"Total      : {snap.total_mb} MB",
        f"Used       : {snap.used_mb} MB",
        f"Available  : {snap.available_mb} MB",
        f"Usage      : {usage}",
    ]


def heavy_lines(report: StatusReport) -> list[str]:
    """Heavy path section of the report, empty when nothing was measured."""
    if not report.heavy_paths:
        return []
    title = f"Top heavy paths under {report.heavy_root} (approx):"
    lines = [title, "-" * len(title)]
    lines += [f"{format_size_kb(h.size_kb)}\t{h.path}" for h in report.heavy_paths]
    return lines


def format_status_text(report: StatusReport) -> str:
    """Render the complete report as plain text."""
    lines = [*usage_lines(report), "", severity_message(report)]
    heavy = heavy_lines(report)
    if heavy:
        lines += ["", *heavy]
    return "\n".join(lines) + "\n"
