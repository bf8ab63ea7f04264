"""QandA: a server-rendered question and answer site."""

__version__ = "0.1.0"
