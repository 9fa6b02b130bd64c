"""Node layout for rendered graphs.

Positions are advisory; the rendering layer may replace them. The graph
builder stamps every node with the fixed zig-zag position, and
``responsive_positions`` re-flows nodes into a serpentine grid that fits a
canvas width.
"""

from rungraph.models.graph import GraphNode, Position

ZIGZAG_ORIGIN_X = 80
ZIGZAG_STEP_X = 290
ZIGZAG_TOP_Y = 90
ZIGZAG_BOTTOM_Y = 290

CARD_WIDTH = 240
CARD_HEIGHT = 116
LAYOUT_HORIZONTAL_GAP = 36
LAYOUT_VERTICAL_GAP = 88
LAYOUT_PADDING_X = 44
LAYOUT_PADDING_Y = 52


def zigzag_position(index: int) -> Position:
    """Even indexes sit on the top row, odd indexes on the bottom row."""
    return Position(
        x=ZIGZAG_ORIGIN_X + index * ZIGZAG_STEP_X,
        y=ZIGZAG_TOP_Y if index % 2 == 0 else ZIGZAG_BOTTOM_Y,
    )


def responsive_positions(
    nodes: list[GraphNode], canvas_width: int
) -> dict[str, Position]:
    """Lay nodes out in centered rows that fit ``canvas_width``.

    Odd rows run right to left so consecutive nodes stay adjacent across row
    breaks.
    """
    positions: dict[str, Position] = {}
    if not nodes:
        return positions

    inner_width = max(CARD_WIDTH, canvas_width - LAYOUT_PADDING_X * 2)
    columns = max(
        1,
        (inner_width + LAYOUT_HORIZONTAL_GAP) // (CARD_WIDTH + LAYOUT_HORIZONTAL_GAP),
    )

    cursor = 0
    row = 0
    while cursor < len(nodes):
        items_in_row = min(columns, len(nodes) - cursor)
        row_width = items_in_row * CARD_WIDTH + max(0, items_in_row - 1) * LAYOUT_HORIZONTAL_GAP
        # half-up rounding; round() would bank to even
        row_offset = LAYOUT_PADDING_X + max(0, int((inner_width - row_width) / 2 + 0.5))

        for col in range(items_in_row):
            visual_col = col if row % 2 == 0 else items_in_row - 1 - col
            node = nodes[cursor + col]
            positions[node.id] = Position(
                x=row_offset + visual_col * (CARD_WIDTH + LAYOUT_HORIZONTAL_GAP),
                y=LAYOUT_PADDING_Y + row * (CARD_HEIGHT + LAYOUT_VERTICAL_GAP),
            )

        cursor += items_in_row
        row += 1

    return positions
