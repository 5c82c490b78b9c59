"""Abstract player interface for AI or scripted controllers."""


class Player:
    def __init__(self, color):
        self.color = color

    def next_move(self, board, deadline=None):
        """Return (x, y) for next move within time limit."""
        raise NotImplementedError
