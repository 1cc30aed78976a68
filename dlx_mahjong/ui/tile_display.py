"""Tile display formatting with colors for terminal output."""

from typing import Iterable, Optional, Sequence

from rich.text import Text

from dlx_mahjong.core.tile import Tile, Suit


SUIT_COLORS = {
    Suit.CIRCLES: "blue",
    Suit.BAMBOOS: "green",
    Suit.CHARACTERS: "red",
    Suit.WINDS: "yellow",
    Suit.DRAGONS: "magenta",
}

HIDDEN_TILE = "[##]"


def tile_to_rich_text(tile: Tile, highlight: bool = False) -> Text:
    """Convert a tile to a Rich Text object; open tiles are underlined."""
    style = f"bold {SUIT_COLORS[tile.suit]}"
    if not tile.hidden:
        style += " underline"
    if highlight:
        style += " on white"
    return Text(f"[{tile.short_name}]", style=style)


def tile_to_simple_str(tile: Tile) -> str:
    """Plain shorthand (stable, for logging)."""
    return tile.short_name


def tiles_to_rich_text(tiles: Iterable[Tile], separator: str = " ",
                       highlight: Optional[Tile] = None) -> Text:
    """Convert a list of tiles to Rich Text, highlighting one tile object if given."""
    result = Text()
    for i, tile in enumerate(tiles):
        if i > 0:
            result.append(separator)
        result.append_text(tile_to_rich_text(tile, highlight=tile is highlight))
    return result


def hand_to_rich_text(tiles: Sequence[Tile], show_hidden: bool = True,
                      numbered: bool = False, highlight: Optional[Tile] = None) -> Text:
    """Render a hand.

    With ``show_hidden`` False the hidden tiles are masked and only open tiles
    are readable. ``numbered`` prefixes each tile with its hand index, for
    discard prompts.
    """
    result = Text()
    for i, tile in enumerate(tiles):
        if i > 0:
            result.append(" ")
        if numbered:
            result.append(f"{i}:", style="dim")
        if tile.hidden and not show_hidden:
            result.append(HIDDEN_TILE, style="dim")
        else:
            result.append_text(tile_to_rich_text(tile, highlight=tile is highlight))
    return result
