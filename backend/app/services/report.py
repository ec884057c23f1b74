"""Case report PDF (PyMuPDF)

A4 pre-validation report in Catalan: property data, overall verdict band,
per-rule table, fix plan, missing evidence, and a footer on every page.
Base-14 Helvetica only, so text is folded to Latin-1.
"""

from __future__ import annotations

import logging
import textwrap

import fitz  # PyMuPDF

from app.models.case import Case
from app.models.evaluation import RuleSeverity

logger = logging.getLogger(__name__)

PAGE_WIDTH, PAGE_HEIGHT = fitz.paper_size("a4")
MARGIN = 56
BOTTOM_LIMIT = PAGE_HEIGHT - 90  # footer area below
FONT = "helv"
FONT_BOLD = "hebo"

MESSAGE_MAX_CHARS = 60
FIX_MAX_CHARS = 80

STATUS_COLORS: dict[RuleSeverity, tuple[float, float, float]] = {
    RuleSeverity.PASS: (34 / 255, 197 / 255, 94 / 255),
    RuleSeverity.RISK: (251 / 255, 191 / 255, 36 / 255),
    RuleSeverity.FAIL: (239 / 255, 68 / 255, 68 / 255),
    RuleSeverity.UNKNOWN: (156 / 255, 163 / 255, 175 / 255),
}

STATUS_LABELS: dict[RuleSeverity, str] = {
    RuleSeverity.PASS: "APROVAT",
    RuleSeverity.RISK: "RISC",
    RuleSeverity.FAIL: "NO APROVAT",
    RuleSeverity.UNKNOWN: "PENDENT",
}

DISCLAIMER = (
    "Aquest és un informe de pre-validació. "
    "No substitueix la certificació oficial d'un tècnic qualificat."
)

_BLACK = (0, 0, 0)
_WHITE = (1, 1, 1)
_GREY = (0.5, 0.5, 0.5)
_HEADER_BLUE = (59 / 255, 130 / 255, 246 / 255)

# Rule table columns: x offset from margin, width
_COL_NAME = (0, 170)
_COL_STATUS = (170, 80)
_COL_MESSAGE = (250, PAGE_WIDTH - 2 * MARGIN - 250)


def _latin1(text: str) -> str:
    return text.encode("latin-1", "replace").decode("latin-1")


def _truncate(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[:limit] + "..."


class _Writer:
    """Cursor over a growing document"""

    def __init__(self, doc: fitz.Document) -> None:
        self.doc = doc
        self.page = doc.new_page(width=PAGE_WIDTH, height=PAGE_HEIGHT)
        self.y = MARGIN

    def ensure_space(self, height: float) -> None:
        if self.y + height > BOTTOM_LIMIT:
            self.page = self.doc.new_page(width=PAGE_WIDTH, height=PAGE_HEIGHT)
            self.y = MARGIN

    def text(self, text: str, size: float = 10, *, x: float = MARGIN, bold: bool = False,
             color=_BLACK, advance: float | None = None) -> None:
        self.ensure_space(size + 4)
        self.page.insert_text(
            (x, self.y + size),
            _latin1(text),
            fontsize=size,
            fontname=FONT_BOLD if bold else FONT,
            color=color,
        )
        self.y += advance if advance is not None else size + 6

    def wrapped(self, text: str, size: float = 10, width_chars: int = 95) -> None:
        for line in textwrap.wrap(text, width=width_chars) or [""]:
            self.text(line, size)

    def gap(self, height: float) -> None:
        self.y += height


def _property_section(w: _Writer, case: Case) -> None:
    prop = case.property_input
    w.text("Informació de la Propietat", 14, bold=True)
    if prop.address:
        w.text(f"Adreça: {prop.address}")
    w.text(f"Municipi: {prop.municipality or 'N/A'}")
    w.text(f"Tipus: {prop.property_type or 'N/A'}")
    w.text(f"Ús: {prop.use_case or 'N/A'}")
    if prop.useful_area is not None:
        w.text(f"Superfície útil: {prop.useful_area:g} m²")


def _verdict_section(w: _Writer, case: Case) -> None:
    result = case.evaluation_result
    status = RuleSeverity(result.overall_status)
    w.gap(6)
    w.text("Resultat General", 14, bold=True)
    w.ensure_space(30)
    band = fitz.Rect(MARGIN, w.y, MARGIN + 150, w.y + 22)
    w.page.draw_rect(band, color=None, fill=STATUS_COLORS[status])
    w.page.insert_text(
        (MARGIN + 10, w.y + 15), STATUS_LABELS[status], fontsize=12, fontname=FONT_BOLD, color=_WHITE
    )
    w.gap(32)
    w.text(f"Confiança: {result.confidence}%")


def _rules_table(w: _Writer, case: Case) -> None:
    rules = case.evaluation_result.rules
    w.gap(8)
    w.text("Detall de Requisits", 14, bold=True)
    if not rules:
        w.text("No hi ha regles per mostrar.")
        return

    row_h = 16

    def header() -> None:
        w.ensure_space(row_h)
        w.page.draw_rect(
            fitz.Rect(MARGIN, w.y, PAGE_WIDTH - MARGIN, w.y + row_h), color=None, fill=_HEADER_BLUE
        )
        for label, (dx, _) in (("Requisit", _COL_NAME), ("Estat", _COL_STATUS), ("Missatge", _COL_MESSAGE)):
            w.page.insert_text((MARGIN + dx + 4, w.y + 11), label, fontsize=9, fontname=FONT_BOLD, color=_WHITE)
        w.gap(row_h)

    header()
    for rule in rules:
        if w.y + row_h > BOTTOM_LIMIT:
            w.ensure_space(row_h * 2)
            header()
        severity = RuleSeverity(rule.severity)
        status_x, status_w = _COL_STATUS
        w.page.draw_rect(
            fitz.Rect(MARGIN + status_x, w.y, MARGIN + status_x + status_w, w.y + row_h),
            color=None,
            fill=STATUS_COLORS[severity],
        )
        w.page.insert_text((MARGIN + _COL_NAME[0] + 4, w.y + 11), _latin1(rule.rule_name), fontsize=8, fontname=FONT)
        w.page.insert_text(
            (MARGIN + status_x + 4, w.y + 11), severity.value.upper(), fontsize=8, fontname=FONT_BOLD, color=_WHITE
        )
        w.page.insert_text(
            (MARGIN + _COL_MESSAGE[0] + 4, w.y + 11),
            _latin1(_truncate(rule.message or "N/A", MESSAGE_MAX_CHARS)),
            fontsize=8,
            fontname=FONT,
        )
        w.page.draw_line(
            fitz.Point(MARGIN, w.y + row_h), fitz.Point(PAGE_WIDTH - MARGIN, w.y + row_h), color=(0.85, 0.85, 0.85)
        )
        w.gap(row_h)


def _list_section(w: _Writer, title: str, items: list[str], numbered: bool) -> None:
    if not items:
        return
    w.gap(14)
    w.ensure_space(40)
    w.text(title, 14, bold=True)
    for index, item in enumerate(items, start=1):
        if numbered:
            w.wrapped(f"{index}. {_truncate(item or 'N/A', FIX_MAX_CHARS)}")
        else:
            w.wrapped(f"- {item or 'N/A'}")


def _footer(doc: fitz.Document, case: Case) -> None:
    result = case.evaluation_result
    generated = result.timestamp.strftime("%d/%m/%Y %H:%M") if result.timestamp else "Data desconeguda"
    version = result.ruleset_version or "Desconeguda"
    for page in doc:
        page.insert_text(
            (MARGIN, PAGE_HEIGHT - 50),
            _latin1(f"Generat el {generated} | Versió: {version}"),
            fontsize=8,
            fontname=FONT,
            color=_GREY,
        )
        page.insert_text((MARGIN, PAGE_HEIGHT - 38), _latin1(DISCLAIMER), fontsize=8, fontname=FONT, color=_GREY)


def render_case_report(case: Case) -> bytes:
    """Case → PDF bytes"""
    doc = fitz.open()
    try:
        w = _Writer(doc)
        w.text("Informe de Pre-validació", 20, bold=True, advance=30)
        w.text("Cèdula d'Habitabilitat - Catalunya", 12, advance=28)

        _property_section(w, case)
        _verdict_section(w, case)
        _rules_table(w, case)
        _list_section(w, "Pla de Correcció", case.evaluation_result.fix_plan, numbered=True)
        _list_section(w, "Evidència Faltant", case.evaluation_result.missing_evidence, numbered=False)
        _footer(doc, case)

        data = doc.tobytes(garbage=3, deflate=True)
        logger.debug("Report for case %s: %d pages, %d bytes", case.id, doc.page_count, len(data))
        return data
    finally:
        doc.close()
