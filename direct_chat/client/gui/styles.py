"""Shared style constants for the GUI client."""

APP_BG = "#0f172a"
SIDEBAR_BG = "#0f172a"
PANEL_BORDER = "#1e293b"
BUBBLE_MINE = "#2563eb"
BUBBLE_THEIRS = "#1e293b"
ACCENT = "#2563eb"
ACCENT_HOVER = "#3b82f6"
TEXT_PRIMARY = "#f1f5f9"
TEXT_MUTED = "#94a3b8"
PADDING = 16
BORDER_RADIUS = 12
AVATAR_SIZE = 40
