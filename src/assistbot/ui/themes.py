"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes and visual appearance
- Theme variables (borders, scrollbars, etc.)

To add a new theme, define it here and register in the app.
"""

from textual.theme import Theme

# Indigo-on-slate palette
INDIGO_NIGHT = Theme(
    name="indigo-night",
    primary="#6366f1",      # Indigo 500 - assistant accent
    secondary="#94a3b8",    # Slate 400 - user accent
    accent="#a5b4fc",       # Indigo 300 - highlights
    foreground="#e2e8f0",   # Slate 200
    background="#0f172a",   # Slate 900
    success="#4ade80",      # Connected status
    warning="#fbbf24",      # Warning marker replies
    error="#f87171",
    surface="#1e293b",      # Slate 800
    panel="#172033",
    dark=True,
    variables={
        "block-cursor-foreground": "#0f172a",
        "block-cursor-background": "#a5b4fc",
        "block-cursor-text-style": "bold",

        "input-cursor-background": "#e2e8f0",
        "input-cursor-foreground": "#0f172a",
        "input-selection-background": "#6366f1 30%",

        "border": "#334155",
        "border-blurred": "#1e293b",

        "scrollbar": "#334155",
        "scrollbar-hover": "#475569",
        "scrollbar-active": "#6366f1",
        "scrollbar-background": "#172033",

        "footer-key-foreground": "#a5b4fc",
        "footer-background": "#0f172a",

        "text-muted": "#64748b",
    },
)
