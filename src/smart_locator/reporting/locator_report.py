"""
Locator Report - Human-readable summary of the locator history.

Generates:
- HTML (.html) - Table of keys with success rates and status bands
- JSON (.json) - The same data, machine-readable

The report is a sink only; nothing reads it back.
"""

import html
import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from smart_locator.locator.history import HistoryFile, LocatorEntry

logger = logging.getLogger(__name__)


DEFAULT_REPORT_DIR = "test-results/locator-reports"


class RateStatus(Enum):
    """Success-rate band of a locator."""
    GOOD = "good"          # >= 90%
    MODERATE = "moderate"  # >= 70%
    POOR = "poor"
    NEUTRAL = "neutral"    # no attempts


def rate_status(rate: Optional[float]) -> RateStatus:
    if rate is None:
        return RateStatus.NEUTRAL
    if rate >= 0.9:
        return RateStatus.GOOD
    if rate >= 0.7:
        return RateStatus.MODERATE
    return RateStatus.POOR


def _format_rate(rate: Optional[float]) -> str:
    return "N/A" if rate is None else f"{rate * 100:.1f}%"


@dataclass
class LocatorRow:
    """One line of the report."""
    key: str
    selector: str
    alternative_selectors: List[str]
    success_count: int
    failure_count: int
    success_rate: Optional[float]
    status: RateStatus
    last_used: datetime
    last_success: Optional[datetime] = None

    @classmethod
    def from_entry(cls, entry: LocatorEntry) -> "LocatorRow":
        return cls(
            key=entry.key,
            selector=entry.selector,
            alternative_selectors=list(entry.alternative_selectors),
            success_count=entry.success_count,
            failure_count=entry.failure_count,
            success_rate=entry.success_rate,
            status=rate_status(entry.success_rate),
            last_used=entry.last_used,
            last_success=entry.last_success,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "selector": self.selector,
            "alternativeSelectors": self.alternative_selectors,
            "successCount": self.success_count,
            "failureCount": self.failure_count,
            "successRate": self.success_rate,
            "status": self.status.value,
            "lastUsed": self.last_used.isoformat(),
            "lastSuccess": self.last_success.isoformat() if self.last_success else None,
        }


@dataclass
class LocatorReport:
    """
    Snapshot of the locator history for reporting.

    Example:
        >>> report = LocatorReport.from_history(store.history, page_url=page.url)
        >>> html_path, json_path = report.write("test-results/locator-reports")
    """
    rows: List[LocatorRow] = field(default_factory=list)
    generated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    page_url: Optional[str] = None

    @classmethod
    def from_history(cls, history: HistoryFile, page_url: Optional[str] = None) -> "LocatorReport":
        rows = [LocatorRow.from_entry(entry) for entry in history.entries.values()]
        return cls(rows=rows, page_url=page_url)

    @property
    def total_locators(self) -> int:
        return len(self.rows)

    @property
    def overall_success_rate(self) -> float:
        """Successes over all attempts, 0.0 when nothing was attempted."""
        successes = sum(r.success_count for r in self.rows)
        attempts = sum(r.success_count + r.failure_count for r in self.rows)
        return successes / attempts if attempts else 0.0

    @property
    def total_alternatives(self) -> int:
        return sum(len(r.alternative_selectors) for r in self.rows)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.generated_at.isoformat(),
            "url": self.page_url,
            "summary": {
                "totalLocators": self.total_locators,
                "overallSuccessRate": self.overall_success_rate,
                "totalAlternatives": self.total_alternatives,
            },
            "locators": [r.to_dict() for r in self.rows],
        }

    def export_json(self, path: Path | str) -> Path:
        """Export report as JSON."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)
        return path

    def export_html(self, path: Path | str) -> Path:
        """Export report as HTML."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.render_html(), encoding="utf-8")
        return path

    def write(self, report_dir: Path | str = DEFAULT_REPORT_DIR) -> tuple[Path, Path]:
        """
        Write timestamped HTML and JSON reports into a directory.

        Returns:
            (html_path, json_path)
        """
        report_dir = Path(report_dir)
        stamp = self.generated_at.strftime("%Y-%m-%dT%H-%M-%S-%f")
        html_path = self.export_html(report_dir / f"locator-report-{stamp}.html")
        json_path = self.export_json(report_dir / f"locator-report-{stamp}.json")
        logger.info(f"Locator Report generated at: {html_path}")
        return html_path, json_path

    def render_html(self) -> str:
        rows_html = ""
        for row in self.rows:
            alternatives = "<br>".join(html.escape(s) for s in row.alternative_selectors) or "None"
            last_success = row.last_success.strftime("%Y-%m-%d %H:%M:%S") if row.last_success else "Never"
            rows_html += f"""
            <tr class="{row.status.value}">
                <td>{html.escape(row.key)}</td>
                <td>{html.escape(row.selector)}</td>
                <td>{alternatives}</td>
                <td>{row.success_count}</td>
                <td>{row.failure_count}</td>
                <td>{_format_rate(row.success_rate)}</td>
                <td>{row.last_used.strftime("%Y-%m-%d %H:%M:%S")}</td>
                <td>{last_success}</td>
            </tr>"""

        return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>Smart Locator Report</title>
    <style>
        body {{ font-family: Arial, sans-serif; margin: 20px; background-color: #f5f5f5; color: #333; line-height: 1.6; }}
        .header, .summary-card, .legend {{ background-color: #fff; padding: 15px; border-radius: 8px; box-shadow: 0 2px 4px rgba(0,0,0,0.1); }}
        .header {{ margin-bottom: 20px; }}
        .summary {{ display: grid; grid-template-columns: repeat(auto-fit, minmax(200px, 1fr)); gap: 20px; margin-bottom: 20px; }}
        table {{ width: 100%; border-collapse: collapse; background-color: #fff; box-shadow: 0 1px 3px rgba(0,0,0,0.1); }}
        th, td {{ padding: 12px; text-align: left; border-bottom: 1px solid #ddd; }}
        th {{ background-color: #f8f9fa; }}
        .good {{ background-color: #e8f5e9; }}
        .moderate {{ background-color: #fff3e0; }}
        .poor {{ background-color: #ffebee; }}
        .neutral {{ background-color: #f5f5f5; }}
        .legend {{ margin-top: 20px; }}
    </style>
</head>
<body>
    <div class="header">
        <h1>Smart Locator Report</h1>
        <p>Generated on: {self.generated_at.isoformat()}</p>
        <p>Page URL: {html.escape(self.page_url or "N/A")}</p>
    </div>

    <div class="summary">
        <div class="summary-card"><h3>Total Locators</h3><p>{self.total_locators}</p></div>
        <div class="summary-card"><h3>Success Rate</h3><p>{self.overall_success_rate * 100:.1f}%</p></div>
        <div class="summary-card"><h3>Alternative Selectors</h3><p>{self.total_alternatives}</p></div>
    </div>

    <table>
        <thead>
            <tr>
                <th>Key</th>
                <th>Primary Selector</th>
                <th>Alternative Selectors</th>
                <th>Successes</th>
                <th>Failures</th>
                <th>Success Rate</th>
                <th>Last Used</th>
                <th>Last Success</th>
            </tr>
        </thead>
        <tbody>{rows_html}
        </tbody>
    </table>

    <div class="legend">
        <h3>Success Rate Legend</h3>
        <p>Good: &ge;90% success rate</p>
        <p>Moderate: 70-89% success rate</p>
        <p>Poor: &lt;70% success rate</p>
        <p>N/A: No attempts recorded</p>
    </div>
</body>
</html>"""
