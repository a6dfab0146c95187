"""Language-model usage tracking and rate limiting."""

import json
import sys
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Dict, Optional

DEFAULT_USAGE_LIMITS = {
    "max_calls_per_minute": 30,
    "max_calls_per_hour": 500,
    "max_calls_per_day": 5000,
    "warning_threshold_pct": 80,
    "paused": False,
}


def _get_default_limits() -> Dict[str, Any]:
    try:
        from automate.config import CONFIG
        return CONFIG["usage_limits"]
    except Exception:
        return dict(DEFAULT_USAGE_LIMITS)


class UsageLimitExceeded(Exception):
    """Raised when a usage limit is exceeded"""
    pass


class UsageTracker:
    """Tracks generateContent calls and enforces rate limits.

    Kept in memory unless ``usage_file`` is given, in which case the call
    history survives restarts.
    """

    def __init__(
        self,
        usage_file: Optional[str] = None,
        limits: Optional[Dict[str, Any]] = None,
    ):
        self.usage_file = Path(usage_file) if usage_file else None
        if self.usage_file:
            self.usage_file.parent.mkdir(parents=True, exist_ok=True)
        self.limits = limits if limits is not None else _get_default_limits()
        self._data = self._load()

    def _load(self) -> Dict[str, Any]:
        """Load usage data from file"""
        if self.usage_file and self.usage_file.exists():
            try:
                with open(self.usage_file, "r", encoding="utf-8") as f:
                    return json.load(f)
            except Exception as e:
                print(f"Failed to load usage data: {e}", file=sys.stderr)
        return {"calls": [], "total_calls": 0}

    def _save(self):
        if not self.usage_file:
            return
        try:
            with open(self.usage_file, "w", encoding="utf-8") as f:
                json.dump(self._data, f, indent=2, ensure_ascii=False)
        except Exception as e:
            print(f"Failed to save usage data: {e}", file=sys.stderr)

    def _calls_since(self, seconds: float) -> int:
        """Count calls within the last N seconds"""
        cutoff = (datetime.now() - timedelta(seconds=seconds)).isoformat()
        return sum(1 for ts in self._data["calls"] if ts > cutoff)

    def _cleanup_old_calls(self):
        """Remove call timestamps older than 24 hours"""
        cutoff = (datetime.now() - timedelta(hours=24)).isoformat()
        self._data["calls"] = [ts for ts in self._data["calls"] if ts > cutoff]

    def check_limits(self):
        """Raise UsageLimitExceeded if the next call would break a limit."""
        limits = self.limits

        if limits.get("paused", False):
            raise UsageLimitExceeded("Usage is paused by configuration")

        windows = (
            ("Per-minute", 60, "max_calls_per_minute"),
            ("Per-hour", 3600, "max_calls_per_hour"),
            ("Daily", 86400, "max_calls_per_day"),
        )
        for label, seconds, key in windows:
            used = self._calls_since(seconds)
            if used >= limits[key]:
                raise UsageLimitExceeded(f"{label} limit reached: {used}/{limits[key]}")

    def record_call(self):
        """Record a successful call"""
        self._cleanup_old_calls()
        self._data["calls"].append(datetime.now().isoformat())
        self._data["total_calls"] = self._data.get("total_calls", 0) + 1
        self._save()

    def get_warning(self) -> Optional[str]:
        """Return a warning once daily usage passes the threshold percentage"""
        limits = self.limits
        per_day = self._calls_since(86400)
        threshold = limits["max_calls_per_day"] * limits["warning_threshold_pct"] / 100

        if per_day >= threshold:
            return (
                f"Usage warning: {per_day}/{limits['max_calls_per_day']} "
                f"daily calls used ({per_day * 100 // limits['max_calls_per_day']}%)"
            )
        return None

    def get_status(self) -> Dict[str, Any]:
        limits = self.limits
        return {
            "calls_today": self._calls_since(86400),
            "calls_this_hour": self._calls_since(3600),
            "calls_this_minute": self._calls_since(60),
            "limits": {
                "per_minute": limits["max_calls_per_minute"],
                "per_hour": limits["max_calls_per_hour"],
                "per_day": limits["max_calls_per_day"],
            },
            "paused": limits.get("paused", False),
            "total_calls_all_time": self._data.get("total_calls", 0),
        }
