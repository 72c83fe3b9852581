"""Static colour styles and terminal control sequences."""

from __future__ import annotations

from rich.control import Control

PURPLE = "color(127)"
RED = "color(196)"
BLUE = "color(81)"
ORANGE = "color(208)"
GREY = "color(238)"
GREEN = "color(120)"
SELECTED_ROW = "on color(166)"

HIDE_CURSOR = Control.show_cursor(False)
SHOW_CURSOR = Control.show_cursor(True)
CURSOR_HOME = Control.home()
ERASE_SCREEN = Control.clear()

# Full repaint: cursor to (1,1) then erase the display.
CLEAR_ALL = (CURSOR_HOME, ERASE_SCREEN)
