"""
Hetmańska Krzyżówka crossword archive fetcher.

Puzzle pages are parsed into a cell matrix annotated with word spans, plus the
across and down clue lists, and stored as JSON. Parsing (hetman.scraper) is
kept separate from I/O (hetman.driver.sync_driver).
"""
