"""Board state container and line-scanning primitives."""

EMPTY = 0
BLACK = 1
WHITE = 2

BOARD_SIZE = 15

# Horizontal, vertical, diagonal, anti-diagonal. Each axis is walked in both senses.
DIRECTIONS = ((1, 0), (0, 1), (1, 1), (1, -1))


def opponent(player):
    return WHITE if player == BLACK else BLACK


class Board:
    def __init__(self, size=BOARD_SIZE):
        # Store cells as 0 (empty), 1 (black), 2 (white); indexed cells[y][x]
        self.size = size
        self.cells = [[EMPTY] * size for _ in range(size)]
        self.move_count = 0
        self.history = []

    @classmethod
    def from_grid(cls, grid):
        """Build a board from a square grid[y][x] of cell values (copied, never aliased)."""
        size = len(grid)
        board = cls(size)
        for y, row in enumerate(grid):
            if len(row) != size:
                raise ValueError("grid must be square")
            for x, value in enumerate(row):
                if value not in (EMPTY, BLACK, WHITE):
                    raise ValueError(f"invalid cell value {value!r} at ({x}, {y})")
                if value != EMPTY:
                    board.cells[y][x] = value
                    board.move_count += 1
        return board

    def to_grid(self):
        return [row[:] for row in self.cells]

    @property
    def center(self):
        c = self.size // 2
        return (c, c)

    def in_bounds(self, x, y):
        return 0 <= x < self.size and 0 <= y < self.size

    def get(self, x, y):
        return self.cells[y][x]

    def is_empty(self, x, y):
        return self.in_bounds(x, y) and self.cells[y][x] == EMPTY

    def empty_cells(self):
        return [(x, y) for y in range(self.size) for x in range(self.size) if self.cells[y][x] == EMPTY]

    def place(self, x, y, color):
        """Place a stone; raise if out of bounds or occupied."""
        if color not in (BLACK, WHITE):
            raise ValueError("color must be 1 (black) or 2 (white)")
        if not self.in_bounds(x, y):
            raise ValueError("move out of bounds")
        if self.cells[y][x] != EMPTY:
            raise ValueError("cell already occupied")
        self._push_stone(x, y, color)

    def undo(self):
        """Remove the most recently placed stone. Returns its (x, y) or None."""
        if not self.history:
            return None
        x, y = self.history[-1]
        self._pop_stone(x, y)
        return (x, y)

    def _push_stone(self, x, y, color):
        # Unchecked placement for search make/unmake; always pair with _pop_stone.
        self.cells[y][x] = color
        self.move_count += 1
        self.history.append((x, y))

    def _pop_stone(self, x, y):
        self.cells[y][x] = EMPTY
        self.move_count -= 1
        self.history.pop()

    def is_full(self):
        return self.move_count >= self.size * self.size

    def count_dir(self, x, y, dx, dy, color, limit=None):
        """Count contiguous stones of color from (x,y) (exclusive) in (dx,dy)."""
        count = 0
        cx, cy = x + dx, y + dy
        while self.in_bounds(cx, cy) and self.cells[cy][cx] == color:
            count += 1
            if limit is not None and count >= limit:
                break
            cx += dx
            cy += dy
        return count

    def collect_line(self, x, y, dx, dy, color):
        """Return the contiguous run of color through (x, y), ascending along (dx, dy)."""
        backward = self.count_dir(x, y, -dx, -dy, color)
        forward = self.count_dir(x, y, dx, dy, color)
        sx, sy = x - dx * backward, y - dy * backward
        return [(sx + dx * i, sy + dy * i) for i in range(backward + forward + 1)]
