"""
lispworld module: render/colors.py

Central color palette.
"""

BG = (17, 17, 17)
OBSTACLE = (102, 102, 102)
HUD_TEXT = (235, 235, 235)
HUD_BG = (0, 0, 0)


def animal_color(color: int, energy: int) -> tuple:
    # red/blue by lineage color, fading toward black as energy runs out
    intensity = max(0.0, min(1.0, energy / 200))
    return (int(color * intensity), 0, int((255 - color) * intensity))
