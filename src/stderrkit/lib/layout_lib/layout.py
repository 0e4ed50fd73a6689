"""
Layout engine — pure string builders for boxes, banners and tables.

Nothing here writes to a terminal. Each function returns strings or
lists of lines; the Logger decides colour and where they go. That keeps
every width calculation testable without a console.

Width is measured in code points (len() of a str). Wide glyphs and
combining characters are not accounted for.
"""

from typing import Iterable, List, Optional, Sequence, Tuple

from .borders import BorderStyle, BoxChars, box_chars


DEFAULT_WIDTH = 80
CONTEXT_BANNER_MAX = 60
COLUMN_GAP = "  "


def measure(text: str) -> int:
    """Return the widest line of ``text`` in code points (0 when empty)."""
    return max((len(line) for line in text.splitlines()), default=0)


# ---------------------------------------------------------------------------
# Banners
# ---------------------------------------------------------------------------
def banner_fill(text: str, fill_char: str, width: int) -> Tuple[str, str]:
    """Compute the fill bars either side of a centred banner.

    The banner is ``left + ' ' + text + ' ' + right``. When the text plus
    its two spaces does not fit, both bars are empty and the banner
    degrades to ``' text '``.

    Raises:
        ValueError: If ``fill_char`` is not a single character.
    """
    if len(fill_char) != 1:
        raise ValueError(f"fill_char must be a single character, got {fill_char!r}")
    text_len = len(text) + 2
    if text_len >= width:
        return "", ""
    total_fill = width - text_len
    left_fill = total_fill // 2
    return fill_char * left_fill, fill_char * (total_fill - left_fill)


def banner_text(text: str, fill_char: str = "=", width: int = DEFAULT_WIDTH) -> str:
    """Return ``text`` centred within ``width`` columns of ``fill_char``."""
    left, right = banner_fill(text, fill_char, width)
    return f"{left} {text} {right}"


def context_banner_text(context: str, width: int = DEFAULT_WIDTH) -> str:
    """Return the ``--- Context: ctx ---`` banner, capped at 60 columns."""
    width = min(width, CONTEXT_BANNER_MAX)
    msg = f" Context: {context} "
    if len(msg) >= width:
        return f"---{msg}---"
    total_fill = width - len(msg)
    left_fill = total_fill // 2
    return f"{'-' * left_fill}{msg}{'-' * (total_fill - left_fill)}"


# ---------------------------------------------------------------------------
# Boxes
# ---------------------------------------------------------------------------
def box_lines(text: str, style: BorderStyle = BorderStyle.LIGHT) -> List[str]:
    """Render ``text`` inside a border.

    Every content row is padded to the widest input line, so the right
    border lines up. Empty text yields no lines at all.
    """
    lines = text.splitlines()
    if not lines:
        return []
    chars = box_chars(style)
    content_width = measure(text)
    edge = chars.horizontal * (content_width + 2)

    out = [f"{chars.top_left}{edge}{chars.top_right}"]
    for line in lines:
        out.append(f"{chars.vertical} {line.ljust(content_width)} {chars.vertical}")
    out.append(f"{chars.bottom_left}{edge}{chars.bottom_right}")
    return out


# ---------------------------------------------------------------------------
# Bitmask tables
# ---------------------------------------------------------------------------
def flag_table_width(columns: int) -> int:
    """Columns a single-row flag table of ``columns`` bits needs."""
    return 3 + columns * 5 + 1


def _grid_border(left: str, joint: str, right: str, chars: BoxChars, columns: int) -> str:
    cell = chars.horizontal * 4
    return f" {left}{cell}{(joint + cell) * (columns - 1)}{right}"


def _flag_block(bitmask: int, labels: Sequence[str], indices: Sequence[int],
                chars: BoxChars) -> str:
    """Render one bordered block for the given bit indices (in display order)."""
    v = chars.vertical
    index_row = f" {v}"
    value_row = f" {v}"
    label_row = f" {v}"
    for bit in indices:
        label = labels[bit] if bit < len(labels) else ""
        index_row += f" {bit:02} {v}"
        value_row += f"  {(bitmask >> bit) & 1} {v}"
        label_row += f" {label[:2]:>2} {v}"

    columns = len(indices)
    rows = [
        _grid_border(chars.top_left, chars.top_t, chars.top_right, chars, columns),
        index_row,
        _grid_border(chars.left_t, chars.cross, chars.right_t, chars, columns),
        value_row,
        label_row,
        _grid_border(chars.bottom_left, chars.bottom_t, chars.bottom_right, chars, columns),
    ]
    return "\n".join(rows) + "\n"


def bitmask_table(bitmask: int, labels: Sequence[str],
                  style: BorderStyle = BorderStyle.LIGHT,
                  term_width: int = DEFAULT_WIDTH,
                  bits: Optional[int] = None) -> str:
    """Render ``bitmask`` as a bordered index/value/label grid.

    Bits are shown most-significant first. When one row would be wider
    than ``term_width`` the columns are split in two halves, the first
    holding ``ceil(n/2)`` bits, each drawn as its own block. The split is
    never deeper than two blocks, so very long label sets can still
    overflow a narrow terminal.

    Args:
        bitmask: Integer whose low bits are displayed.
        labels: Label per bit, index 0 = least significant bit. Labels
            are cut to two characters.
        style: Border style.
        term_width: Available columns.
        bits: Number of bit columns to draw. Defaults to ``len(labels)``;
            columns past the end of ``labels`` get an empty label.

    Returns:
        The table text (newline terminated), or ``""`` for zero columns.
    """
    count = len(labels) if bits is None else bits
    if count <= 0:
        return ""

    chars = box_chars(style)
    chunk_size = count
    if flag_table_width(count) > term_width:
        chunk_size = (count + 1) // 2
    chunk_count = -(-count // chunk_size)

    blocks = []
    for chunk_index in range(chunk_count):
        start = chunk_index * chunk_size
        stop = min(start + chunk_size, count)
        indices = range(stop - 1, start - 1, -1)
        blocks.append(_flag_block(bitmask, labels, indices, chars))
    return "\n".join(blocks)


# ---------------------------------------------------------------------------
# Tables, lists, columns
# ---------------------------------------------------------------------------
def column_widths(rows: Sequence[Sequence[object]]) -> List[int]:
    """Widest cell per column; the column count comes from the first row."""
    if not rows:
        return []
    widths = [0] * len(rows[0])
    for row in rows:
        for i, cell in enumerate(row[:len(widths)]):
            widths[i] = max(widths[i], len(str(cell)))
    return widths


def table_lines(rows: Sequence[Sequence[object]]) -> List[str]:
    """Lay out ``rows`` as aligned text.

    The result is ``[header, rule, *body]`` where ``rule`` is a dash run
    under each column. Cells past the header's column count are dropped.
    Empty ``rows`` yields ``[]``.
    """
    widths = column_widths(rows)
    if not widths:
        return []

    def _line(row):
        cells = [str(cell).ljust(widths[i]) for i, cell in enumerate(row[:len(widths)])]
        return COLUMN_GAP.join(cells)

    rule = COLUMN_GAP.join("-" * w for w in widths)
    return [_line(rows[0]), rule] + [_line(row) for row in rows[1:]]


def column_lines(items: Sequence[str], num_cols: int) -> List[str]:
    """Flow ``items`` into rows of ``num_cols`` fixed-width columns.

    Raises:
        ValueError: If ``num_cols`` is less than 1.
    """
    if num_cols < 1:
        raise ValueError(f"num_cols must be at least 1, got {num_cols}")
    if not items:
        return []
    col_width = max(len(item) for item in items) + 2
    lines = []
    for start in range(0, len(items), num_cols):
        chunk = items[start:start + num_cols]
        lines.append("".join(item.ljust(col_width) for item in chunk).rstrip())
    return lines


def list_lines(items: Iterable[str], bullet: str = "-") -> List[str]:
    """Prefix each item with ``bullet``."""
    return [f"{bullet} {item}" for item in items]


def numbered_lines(items: Iterable[str]) -> List[str]:
    """Number items from 1."""
    return [f"{i}. {item}" for i, item in enumerate(items, 1)]
