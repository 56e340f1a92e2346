"""Space Dystopia: a text adventure on Europa Station."""

__version__ = "0.5.0"
