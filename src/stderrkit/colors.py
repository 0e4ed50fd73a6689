"""Named colour palette for stderrkit output.

Values are rich colour names (``color(N)`` is an entry of the 256-colour
table), so they can be passed straight to ``rich.style.Style(color=...)``
or to any ``Logger`` method that takes a colour.
"""

VOID = "color(61)"        # dark purple
FOREST = "color(60)"      # dark green
OCEAN = "color(17)"       # dark blue
RED = "color(1)"
RED2 = "color(197)"
BLUE = "cyan"
BLUE2 = "color(39)"
YELLOW = "color(11)"
YELLOW2 = "color(226)"
ORANGE = "color(214)"
ORANGE2 = "color(221)"
GREEN = "color(10)"
GREEN2 = "color(156)"
CYAN = "color(51)"
PURPLE = "color(213)"
PURPLE2 = "color(141)"
BLACK0 = "color(0)"
BLACK = "color(235)"
WHITE = "color(247)"
WHITE2 = "color(15)"
GREY = "color(242)"
GREY2 = "color(240)"
GREY3 = "color(237)"
MAGENTA = "color(13)"
MAGENTA2 = "color(198)"
PINK = "color(211)"
