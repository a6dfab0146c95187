"""Infrastructure: cross-cutting helpers shared by adapters."""

from automate.infrastructure.usage import UsageLimitExceeded, UsageTracker

__all__ = [
    "UsageLimitExceeded",
    "UsageTracker",
]
