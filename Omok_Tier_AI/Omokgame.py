"""Game loop and turn management for a five-in-a-row match."""

from Omok_Tier_AI.Board import BLACK, WHITE, Board, opponent
from Omok_Tier_AI.engine import referee, rules
from Omok_Tier_AI.utils import timer

DRAW = 0
NAMES = {BLACK: "Black", WHITE: "White"}


class Omokgame:
    def __init__(self, board_size, black_player, white_player, move_timeout=None, logger=print):
        self.board = Board(size=board_size)
        self.move_timeout = move_timeout
        self.players = {BLACK: black_player, WHITE: white_player}
        self.logger = logger
        self.current = BLACK
        self.moves = []
        self.result = None
        self.win_line = None

    @property
    def is_over(self):
        return self.result is not None

    def play_move(self, move):
        """Apply `move` for the side to move; returns the result (None while in progress)."""
        if self.result is not None:
            raise ValueError("Game is already over")
        color = self.current
        self.board.place(*move, color)
        self.moves.append((move[0], move[1], color))

        line = rules.winning_line(self.board, move[0], move[1], color)
        if line is not None:
            self.win_line = line
            self.result = color
        elif rules.is_board_full(self.board):
            self.result = DRAW
        else:
            self.current = opponent(color)
        return self.result

    def undo_move(self):
        """Take back the last move. Returns (x, y, color) or None if nothing was played."""
        if not self.moves:
            return None
        x, y, color = self.moves.pop()
        self.board.undo()
        self.current = color
        self.result = None
        self.win_line = None
        return (x, y, color)

    def play(self):
        """Run a single game. Returns 1 (black win), 2 (white win), or 0 (draw)."""
        while self.result is None:
            color = self.current
            player = self.players[color]
            deadline = timer.deadline_after(self.move_timeout) if self.move_timeout else None

            try:
                move = player.next_move(self.board, deadline=deadline)
                referee.check_move(move, self.board, deadline)
            except (TimeoutError, ValueError) as exc:
                self.logger(f"Disqualification: {NAMES[color]} - {exc}")
                self.result = opponent(color)
                break

            self.play_move(move)
            self.logger(f"Move {len(self.moves)}: {NAMES[color][0]} {tuple(move)}")

        if self.result == DRAW:
            self.logger("Result: Draw (board full)")
        else:
            self.logger(f"Winner: {NAMES[self.result]}")
        return self.result
