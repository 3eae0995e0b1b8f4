"""
SnowSeeker report generator
---------------------------
Writes a DOCX summary of the resort list currently on screen.

- python-docx and matplotlib are imported lazily, so browsing works even
  when the report extras are not installed.
- Charts adapt to the list: the per-country chart is skipped when only one
  country is shown.
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple
import logging
import os
import tempfile

from .view import ResortRow

logger = logging.getLogger(__name__)


@dataclass
class ReportConfig:
    """Knobs controlling how the report is written."""
    title: str = "SnowSeeker Report"
    subtitle: str = "Ski resorts at a glance"
    dataset_name: str = "resorts.json"

    # How many categories to show in bar charts
    top_n: int = 10

    # How many rows the resort table may hold
    max_rows: int = 50

    # Commands that produced the list (sort/search)
    command_log: Optional[List[str]] = None


def _choose_bins(n: int) -> int:
    if n <= 20:
        return 5
    if n <= 100:
        return 10
    return 20


def generate_docx_report(
    rows: Sequence[ResortRow],
    out_path: str,
    *,
    config: Optional[ReportConfig] = None,
    scope_label: str = "Current list",
) -> str:
    """Generate a DOCX report with charts for the given rows."""
    config = config or ReportConfig()

    try:
        from docx import Document
        from docx.shared import Pt, Inches
        from docx.enum.text import WD_ALIGN_PARAGRAPH
    except ImportError as e:
        raise ImportError(
            "Missing dependency: python-docx.\n"
            "Install it with: python -m pip install python-docx"
        ) from e

    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        import numpy as np
    except ImportError as e:
        raise ImportError(
            "Missing dependency: matplotlib (and numpy).\n"
            "Install with: python -m pip install matplotlib numpy"
        ) from e

    if not rows:
        raise ValueError("No resorts to report on (the list is empty).")

    resorts = [row.resort for row in rows]
    c_country = Counter(r.country for r in resorts if r.country)
    runs = [r.runs for r in resorts]
    favorites = [row.resort for row in rows if row.is_favorite]

    # -----------------------------
    # Charts
    # -----------------------------
    tmpdir = tempfile.mkdtemp(prefix="snowseeker_report_")
    chart_paths: List[Tuple[str, str]] = []

    def _save(filename: str) -> str:
        path = os.path.join(tmpdir, filename)
        plt.tight_layout()
        plt.savefig(path, dpi=150)
        plt.close()
        return path

    if len(c_country) > 1:
        top = c_country.most_common(config.top_n)
        title = f"Resorts per country ({scope_label})"
        plt.figure()
        plt.bar([k for k, _ in top], [v for _, v in top])
        plt.xticks(rotation=45, ha="right")
        plt.title(title)
        plt.ylabel("Resorts")
        chart_paths.append((title, _save("resorts_per_country.png")))

    title = f"Number of runs ({scope_label})"
    plt.figure()
    counts, bins = np.histogram(np.array(runs, dtype=float), bins=_choose_bins(len(runs)))
    plt.bar(bins[:-1], counts, width=np.diff(bins), align="edge", edgecolor="black", linewidth=0.8)
    plt.title(title)
    plt.xlabel("Runs")
    plt.ylabel("Resorts")
    chart_paths.append((title, _save("runs_hist.png")))

    # -----------------------------
    # Document
    # -----------------------------
    doc = Document()
    style = doc.styles["Normal"]
    style.font.name = "Calibri"
    style.font.size = Pt(11)

    def _center_title(text: str, size: int, bold: bool = False, italic: bool = False) -> None:
        p = doc.add_paragraph()
        r = p.add_run(text)
        r.bold = bold
        r.italic = italic
        r.font.size = Pt(size)
        p.alignment = WD_ALIGN_PARAGRAPH.CENTER

    def _kv(key: str, value: str) -> None:
        p = doc.add_paragraph()
        r = p.add_run(f"{key}: ")
        r.bold = True
        p.add_run(value)

    _center_title(config.title, 22, bold=True)
    _center_title(config.subtitle, 12, italic=True)

    doc.add_paragraph("")
    _kv("Dataset", config.dataset_name)
    _kv("Scope", scope_label)
    _kv("Resorts in scope", str(len(resorts)))
    _kv("Countries", str(len(c_country)))
    _kv("Favorites in scope", str(len(favorites)))
    _kv("Runs (min / max)", f"{min(runs)} / {max(runs)}")

    if config.command_log:
        doc.add_heading("Commands", level=1)
        for line in config.command_log:
            doc.add_paragraph(line, style="List Bullet")

    doc.add_heading("Resorts", level=1)
    t = doc.add_table(rows=1, cols=6)
    h = t.rows[0].cells
    for cell, text in zip(h, ("Name", "Country", "Runs", "Size", "Price", "Favorite")):
        cell.text = text
    for row in list(rows)[:config.max_rows]:
        r = row.resort
        cells = t.add_row().cells
        cells[0].text = r.name
        cells[1].text = r.country
        cells[2].text = str(r.runs)
        cells[3].text = r.size_label
        cells[4].text = r.price_label
        cells[5].text = "yes" if row.is_favorite else ""
    if len(rows) > config.max_rows:
        doc.add_paragraph(f"... {len(rows) - config.max_rows} more not shown")

    doc.add_heading("Visualizations", level=1)
    for title, path in chart_paths:
        doc.add_paragraph(title)
        doc.add_picture(path, width=Inches(6.0))

    from datetime import datetime as _dt
    from . import __version__
    doc.add_heading("Reproducibility footer", level=1)
    doc.add_paragraph(f"SnowSeeker version: {__version__}")
    doc.add_paragraph(f"Report generated at: {_dt.now().isoformat(timespec='seconds')}")

    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    doc.save(out_path)
    logger.info("Wrote report with %d resorts to %s", len(resorts), out_path)
    return out_path
