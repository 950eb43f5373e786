"""Read, edit, convert and package .mflash flashcard decks."""

__version__ = "0.1.4"