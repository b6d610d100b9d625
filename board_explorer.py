"""Arcade-based board explorer.

Renders a live tile-matching session and drives it through the public engine
operations so cascade behaviour can be inspected by hand:

- Left click a cell, then left click a neighbour to swap them.
- Right click a cell to use the clear-cells power-up on it.
- Hold F while clicking two cells to free-swap them (any distance).
- Hold S while clicking a cell to redraw every cell of that symbol.
- ``R`` rebuilds the board, ``G`` rebuilds with a guaranteed match of length
  four, ``N`` rebuilds with no possible match, ``H`` toggles move hints and the
  number keys switch level.

Every outcome is printed to stdout.

Run with: ``python board_explorer.py [--training]``
"""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional, Set, Tuple

import arcade

# Ensure src/ is on the import path so we can import the engine package.
SRC_PATH = Path(__file__).parent / "src"
if SRC_PATH.exists() and str(SRC_PATH) not in sys.path:
    sys.path.append(str(SRC_PATH))

from tilematch.components.power_up import PowerUpType  # type: ignore
from tilematch.factories.levels import level_context_for  # type: ignore
from tilematch.session import GameSession  # type: ignore
from tilematch.systems.board_ops import get_palette  # type: ignore
from tilematch.systems.match_resolution import ResolutionOutcome  # type: ignore

WINDOW_WIDTH = 760
WINDOW_HEIGHT = 720
WINDOW_TITLE = "Tile Match Board Explorer"
BACKGROUND_COLOR = arcade.color.DARK_SLATE_BLUE

CELL_SIZE = 64
CELL_GAP = 4
BOARD_MARGIN_X = 40
BOARD_MARGIN_Y = 120

TEXT_COLOR = arcade.color.ANTIQUE_WHITE
SELECTION_COLOR = arcade.color.WHITE
HINT_COLOR = arcade.color.LIGHT_BLUE

Position = Tuple[int, int]


class BoardExplorerWindow(arcade.Window):
    def __init__(self, session: GameSession) -> None:
        super().__init__(WINDOW_WIDTH, WINDOW_HEIGHT, WINDOW_TITLE)
        arcade.set_background_color(BACKGROUND_COLOR)
        self.session = session
        self.selected: Optional[Position] = None
        self.show_hints = False
        self.total_score = 0
        self.last_message = "Click two neighbouring cells to swap"
        self._held_keys: Set[int] = set()
        for power_up in PowerUpType:
            self.session.power_ups.grant(power_up, 99)

    # ------------------------------------------------------------------

    def on_draw(self) -> None:
        self.clear()
        self._draw_cells()
        if self.show_hints:
            self._draw_hints()
        self._draw_selection()
        self._draw_status()

    # ------------------------------------------------------------------

    def _cell_origin(self, pos: Position) -> Tuple[float, float]:
        x, y = pos
        height = len(self.session.get_board())
        # Row 0 is the top row of the board.
        left = BOARD_MARGIN_X + x * (CELL_SIZE + CELL_GAP)
        bottom = BOARD_MARGIN_Y + (height - 1 - y) * (CELL_SIZE + CELL_GAP)
        return left, bottom

    def _draw_cells(self) -> None:
        palette = get_palette(self.session.world)
        for y, row in enumerate(self.session.get_board()):
            for x, symbol in enumerate(row):
                left, bottom = self._cell_origin((x, y))
                arcade.draw_lbwh_rectangle_filled(left, bottom, CELL_SIZE, CELL_SIZE, palette.color_for(symbol))
                arcade.draw_text(
                    symbol.value[:2].upper(),
                    left + CELL_SIZE / 2,
                    bottom + CELL_SIZE / 2,
                    arcade.color.BLACK,
                    14,
                    anchor_x="center",
                    anchor_y="center",
                )

    def _draw_hints(self) -> None:
        for a, b in self.session.find_valid_swaps():
            for pos in (a, b):
                left, bottom = self._cell_origin(pos)
                arcade.draw_lbwh_rectangle_outline(left, bottom, CELL_SIZE, CELL_SIZE, HINT_COLOR, 2)

    def _draw_selection(self) -> None:
        if self.selected is None:
            return
        left, bottom = self._cell_origin(self.selected)
        arcade.draw_lbwh_rectangle_outline(left - 2, bottom - 2, CELL_SIZE + 4, CELL_SIZE + 4, SELECTION_COLOR, 3)

    def _draw_status(self) -> None:
        context = self.session.level_context
        level = context.level if context else "-"
        privileged = context.privileged_symbol.value if context and context.privileged_symbol else "none"
        lines = [
            f"Level {level}  privileged: {privileged}  score: {self.total_score}",
            self.last_message,
        ]
        arcade.draw_text("\n".join(lines), 20, 80, TEXT_COLOR, 14, multiline=True, width=WINDOW_WIDTH - 40)

    # ------------------------------------------------------------------

    def on_key_press(self, symbol: int, modifiers: int) -> None:
        self._held_keys.add(symbol)
        if symbol == arcade.key.R:
            self.session.board.generate()
            self.last_message = "Board rebuilt"
        elif symbol == arcade.key.G:
            random_hit = self.session.board.generate_with_guaranteed_match(4)
            self.last_message = "Guaranteed match of 4 " + ("found" if random_hit else "forced")
        elif symbol == arcade.key.N:
            scrambled = self.session.board.generate_with_no_possible_match()
            self.last_message = "No possible match " + ("by scrambling" if scrambled else "via stripes")
        elif symbol == arcade.key.H:
            self.show_hints = not self.show_hints
        elif arcade.key.KEY_1 <= symbol <= arcade.key.KEY_9:
            level = symbol - arcade.key.KEY_0
            self.session.set_level(level_context_for(level))
            self.last_message = f"Switched to level {level}"
        self.selected = None

    def on_key_release(self, symbol: int, modifiers: int) -> None:
        self._held_keys.discard(symbol)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int) -> None:
        pos = self._to_cell(x, y)
        if pos is None:
            self.selected = None
            return
        if button == arcade.MOUSE_BUTTON_RIGHT:
            self._report("Clear cells", self.session.power_ups.use(PowerUpType.CLEAR_CELLS, pos))
            self.selected = None
            return
        if button != arcade.MOUSE_BUTTON_LEFT:
            return
        if arcade.key.S in self._held_keys:
            self._report("Symbol swap", self.session.power_ups.use(PowerUpType.SYMBOL_SWAP, pos))
            self.selected = None
            return
        if self.selected is None:
            self.selected = pos
            return
        first, self.selected = self.selected, None
        if arcade.key.F in self._held_keys:
            self._report("Free swap", self.session.power_ups.use(PowerUpType.FREE_SWAP, first, pos))
            return
        outcome = self.session.swap(first, pos)
        self._report("Swap", outcome)
        if outcome.swap_failed:
            self.session.revert_swap(first, pos)

    def _to_cell(self, x: float, y: float) -> Optional[Position]:
        board = self.session.get_board()
        height, width = len(board), len(board[0])
        col = int((x - BOARD_MARGIN_X) // (CELL_SIZE + CELL_GAP))
        row_from_bottom = int((y - BOARD_MARGIN_Y) // (CELL_SIZE + CELL_GAP))
        if x < BOARD_MARGIN_X or y < BOARD_MARGIN_Y:
            return None
        if not (0 <= col < width and 0 <= row_from_bottom < height):
            return None
        return col, height - 1 - row_from_bottom

    def _report(self, label: str, outcome: ResolutionOutcome) -> None:
        if not outcome.accepted:
            self.last_message = f"{label} rejected"
        elif outcome.swap_failed:
            self.last_message = f"{label} made no match, reverted"
        else:
            self.total_score += outcome.score
            self.last_message = (
                f"{label}: {len(outcome.batches)} batches, "
                f"{outcome.cascade_count} cascades, +{outcome.score}"
            )
        print(self.last_message)
        for batch in outcome.batches:
            kind = "cascade" if batch.cascade else "direct"
            runs = ", ".join(f"{m.symbol.value}x{m.length}" for m in batch.matches)
            print(f"  [{batch.depth}] {kind}: {runs} (+{batch.score})")


def main() -> None:
    if "--training" in sys.argv[1:]:
        session = GameSession.training()
    else:
        session = GameSession.for_level(1)
    BoardExplorerWindow(session)
    arcade.run()


if __name__ == "__main__":
    main()
