"""chesspos — chess position model, legal move generation and game-end detection."""

__version__ = "0.1.0"
