"""Font discovery and text rendering helpers."""

from __future__ import annotations

import logging
import os
import threading
from typing import Dict, List, Optional, Tuple

from fpdf import FPDF  # type: ignore

from .config import RenderConfig

logger = logging.getLogger(__name__)

_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def find_font_path(override: Optional[str], candidates: List[str]) -> Optional[str]:
    if override and os.path.exists(override):
        return override

    for path in candidates:
        if os.path.exists(path):
            return path
    return None


FONT_INIT_LOCK = threading.Lock()


class FontManager:
    FAMILY = "InvoiceFont"
    CORE_FAMILY = "Helvetica"
    BUNDLED_REGULAR = os.path.join(_PROJECT_ROOT, "fonts", "DejaVuSans.ttf")
    BUNDLED_BOLD = os.path.join(_PROJECT_ROOT, "fonts", "DejaVuSans-Bold.ttf")
    BUNDLED_ITALIC = os.path.join(_PROJECT_ROOT, "fonts", "DejaVuSans-Oblique.ttf")
    SYSTEM_REGULAR_CANDIDATES = [
        "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
        "/usr/share/fonts/dejavu/DejaVuSans.ttf",
        "/Library/Fonts/DejaVuSans.ttf",
    ]
    SYSTEM_BOLD_CANDIDATES = [
        "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
        "/usr/share/fonts/dejavu/DejaVuSans-Bold.ttf",
        "/Library/Fonts/DejaVuSans-Bold.ttf",
    ]
    SYSTEM_ITALIC_CANDIDATES = [
        "/usr/share/fonts/truetype/dejavu/DejaVuSans-Oblique.ttf",
        "/usr/share/fonts/dejavu/DejaVuSans-Oblique.ttf",
        "/Library/Fonts/DejaVuSans-Oblique.ttf",
    ]

    def __init__(self, pdf: FPDF, config: Optional[RenderConfig] = None) -> None:
        config = config or RenderConfig()
        self.pdf = pdf
        self.styles: Dict[str, bool] = {"": True, "B": True, "I": True}

        regular_path = find_font_path(
            config.font_path,
            [self.BUNDLED_REGULAR, *self.SYSTEM_REGULAR_CANDIDATES],
        )
        if not regular_path:
            # Core fonts only cover Latin-1 text but need no files.
            logger.debug("No TTF font found, using core %s", self.CORE_FAMILY)
            self.family = self.CORE_FAMILY
            return

        self.family = self.FAMILY
        bold_path = find_font_path(
            config.font_bold_path,
            [self.BUNDLED_BOLD, *self.SYSTEM_BOLD_CANDIDATES],
        )
        italic_path = find_font_path(
            config.font_italic_path,
            [self.BUNDLED_ITALIC, *self.SYSTEM_ITALIC_CANDIDATES],
        )

        with FONT_INIT_LOCK:
            self.pdf.add_font(self.FAMILY, "", regular_path)
            self.styles["B"] = self._add_style("B", bold_path)
            self.styles["I"] = self._add_style("I", italic_path)

    def _add_style(self, style: str, path: Optional[str]) -> bool:
        if not path:
            return False
        self.pdf.add_font(self.FAMILY, style, path)
        return True

    def _select(self, size: int, style: str) -> str:
        available = style if self.styles.get(style) else ""
        self.pdf.set_font(self.family, available, size)
        return available

    def text_width(self, text: str, size: int, style: str = "") -> float:
        self._select(size, style)
        return self.pdf.get_string_width(text)

    def draw_text(
        self,
        x: float,
        y: float,
        text: str,
        size: int,
        color: Tuple[int, int, int],
        style: str = "",
    ) -> None:
        self.pdf.set_text_color(*color)
        used = self._select(size, style)
        if style == "B" and used != "B":
            self.pdf.text(x, y, text)
            self.pdf.text(x + 0.4, y, text)
        else:
            self.pdf.text(x, y, text)
