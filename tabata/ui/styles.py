"""QSS stylesheet and stage colors for the Tabata timer."""

from __future__ import annotations

from ..timer.stages import PREPARE, WORK, REST, FINISH

# ── stage colors (active row + countdown accent) ─────────────────────────

STAGE_COLORS: dict[str, str] = {
    PREPARE: "#F9E2AF",   # amber
    WORK:    "#FF6B6B",   # warm coral
    REST:    "#4ECDC4",   # cool teal
    FINISH:  "#A6E3A1",   # green
}

IDLE_COLOR = "#6C7086"

PALETTE: dict[str, str] = {
    "bg":           "#1A1A2E",
    "bg_secondary": "#232340",
    "surface":      "#2A2A4A",
    "accent":       "#CBA6F7",
    "text":         "#E2E2F0",
    "text_muted":   "#7A7A9A",
    "border":       "#313154",
}


def stage_color(name: str | None) -> str:
    """Accent colour for a stage name; neutral for unknown or no stage."""
    if name is None:
        return IDLE_COLOR
    return STAGE_COLORS.get(name, PALETTE["accent"])


def build_stylesheet(palette: dict[str, str] | None = None) -> str:
    p = palette or PALETTE
    return f"""
    QMainWindow, QWidget {{
        background-color: {p['bg']};
        color: {p['text']};
        font-size: 14px;
    }}
    QFrame#card {{
        background-color: {p['bg_secondary']};
        border: 1px solid {p['border']};
        border-radius: 16px;
    }}
    QLabel#stageName {{
        font-size: 28px;
        font-weight: 700;
        letter-spacing: 2px;
    }}
    QLabel#countdown {{
        font-size: 56px;
        font-weight: 300;
        font-family: "Menlo", "DejaVu Sans Mono", monospace;
    }}
    QLabel#upNext {{
        color: {p['text_muted']};
    }}
    QListWidget {{
        background-color: {p['bg_secondary']};
        border: 1px solid {p['border']};
        border-radius: 12px;
        padding: 4px;
    }}
    QListWidget::item {{
        padding: 6px 10px;
        border-radius: 6px;
    }}
    QProgressBar {{
        background-color: {p['surface']};
        border: none;
        border-radius: 4px;
        max-height: 8px;
    }}
    QProgressBar::chunk {{
        border-radius: 4px;
    }}
    QPushButton {{
        background-color: {p['surface']};
        border: 1px solid {p['border']};
        border-radius: 10px;
        padding: 8px 18px;
    }}
    QPushButton#primaryButton {{
        background-color: {p['accent']};
        color: {p['bg']};
        font-weight: 700;
        border: none;
    }}
    QPushButton:hover {{
        border-color: {p['accent']};
    }}
    QStatusBar {{
        color: {p['text_muted']};
    }}
    """
