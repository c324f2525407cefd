"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes and visual appearance
- Theme variables (borders, scrollbars, etc.)

To add a new theme, define it here and register in the app.
"""

from textual.theme import Theme

# Fresh greens on a dark slate, matching the Edibilize brand
EDIBILIZE_DARK = Theme(
    name="edibilize-dark",
    primary="#4ade80",      # Leaf green - main accent
    secondary="#38bdf8",    # Sky - secondary accent
    accent="#facc15",       # Citrus - highlights
    foreground="#e2e8f0",
    background="#0b1120",
    success="#22c55e",
    warning="#fb923c",
    error="#f87171",
    surface="#111827",
    panel="#0f172a",
    dark=True,
    variables={
        "block-cursor-foreground": "#0b1120",
        "block-cursor-background": "#bbf7d0",
        "block-cursor-text-style": "bold",
        "input-selection-background": "#4ade80 30%",

        "border": "#334155",
        "border-blurred": "#1e293b",

        "scrollbar": "#1e293b",
        "scrollbar-hover": "#334155",
        "scrollbar-active": "#4ade80",
        "scrollbar-background": "#0f172a",

        "footer-foreground": "#cbd5e1",
        "footer-background": "#0b1120",
        "footer-key-foreground": "#facc15",
        "footer-key-background": "#1e293b",

        "text-muted": "#64748b",
        "text-disabled": "#334155",

        "button-foreground": "#e2e8f0",
        "button-color-foreground": "#0b1120",
    },
)
