"""Overlay usage probing, classification and reporting."""

from ovlspace.usage.classifier import classify
from ovlspace.usage.models import SeverityLevel, UsageSnapshot
from ovlspace.usage.probe import ProbeUnavailableError, UsageProbe

__all__ = [
    "ProbeUnavailableError",
    "SeverityLevel",
    "UsageProbe",
    "UsageSnapshot",
    "classify",
]
