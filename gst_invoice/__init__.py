"""Public package API for GST tax invoice generation."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from .config import RenderConfig
from .models import Invoice, InvoiceDataError, LineItem, Party
from .words import to_words


def render_invoice(data: Union[Invoice, Mapping[str, Any]], config: Optional[RenderConfig] = None) -> bytes:
    from .rendering import render_invoice as _render_invoice

    return _render_invoice(data, config)


def write_invoice(
    data: Union[Invoice, Mapping[str, Any]],
    directory: Union[str, "os.PathLike[str]"],
    config: Optional[RenderConfig] = None,
) -> Path:
    from .rendering import write_invoice as _write_invoice

    return _write_invoice(data, directory, config)


__all__ = [
    "Invoice",
    "InvoiceDataError",
    "LineItem",
    "Party",
    "RenderConfig",
    "render_invoice",
    "to_words",
    "write_invoice",
]
