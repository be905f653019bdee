"""SVG rendering for the trophy badge."""

from __future__ import annotations

import math
from typing import Dict, Sequence

from markupsafe import escape

from .config import BadgeOptions, Palette
from .models import Rarity, Trophy

FONT = "font-family:Inter,Segoe UI,system-ui,sans-serif;"

CARD_X = 20
CARD_Y = 70
CELL_W = 245
CELL_H = 95
MIN_WIDTH = 750

RARITY_COLORS: Dict[Rarity, str] = {
    Rarity.COMMON: "#9ca3af",
    Rarity.UNCOMMON: "#4ade80",
    Rarity.RARE: "#60a5fa",
    Rarity.EPIC: "#c084fc",
    Rarity.LEGENDARY: "#fbbf24",
}


def _value_color(trophy: Trophy, palette: Palette) -> str:
    if trophy.rarity is None:
        return palette.accent
    return RARITY_COLORS[trophy.rarity]


def render_mini_card(trophy: Trophy, palette: Palette) -> str:
    return f"""
    <g>
      <rect width="220" height="78" rx="12"
        fill="{palette.mini_card_bg}"
        stroke="{palette.border}"
        stroke-width="1.2"
        style="filter: drop-shadow(0 0 6px {palette.accent}33);" />
      <text x="18" y="28"
        style="{FONT} font-size:16px; font-weight:600; fill:{palette.text};">
        {trophy.icon} {escape(trophy.title)}
      </text>
      <text x="18" y="55"
        style="{FONT} font-size:18px; font-weight:700; fill:{_value_color(trophy, palette)};">
        {escape(str(trophy.value))}
      </text>
    </g>
    """


def render_badge(username: str, trophies: Sequence[Trophy], options: BadgeOptions) -> str:
    palette = options.palette
    columns = options.columns

    width = max(MIN_WIDTH, CARD_X * 2 + columns * CELL_W)
    card_width = width - 2 * CARD_X
    rows = max(1, math.ceil(len(trophies) / columns))
    card_height = rows * CELL_H + 40
    height = card_height + 150

    cells = []
    for i, trophy in enumerate(trophies):
        gx = CARD_X + (i % columns) * CELL_W
        gy = CARD_Y + (i // columns) * CELL_H
        cells.append(f'<g transform="translate({gx}, {gy})">{render_mini_card(trophy, palette)}</g>')

    footer_style = f"{FONT} font-size:12px; fill:{palette.accent}; opacity:0.9;"
    return f"""<svg width="{width}" height="{height}" xmlns="http://www.w3.org/2000/svg">
  <rect width="{width}" height="{height}" fill="{palette.bg}"/>
  <rect x="{CARD_X}" y="20" width="{card_width}" height="{card_height}" rx="22"
    fill="{palette.card_bg}"
    stroke="{palette.border}"
    stroke-width="1.5"
    style="filter: drop-shadow(0 0 18px {palette.accent}22);" />
  <text x="{CARD_X + 25}" y="58"
    style="{FONT} font-size:27px; font-weight:800; fill:{palette.accent};">
    🏆 GitHub Trophy — {escape(username)}
  </text>
  {"".join(cells)}
  <text x="{width // 2}" y="{card_height + 68}" text-anchor="middle" style="{footer_style}">
    Contributions &amp; Engagement = recent public GitHub activity
  </text>
  <text x="{width // 2}" y="{card_height + 88}" text-anchor="middle" style="{footer_style}">
    (≈ last 300 events, not the all-time contribution total)
  </text>
</svg>
"""
