"""Static game data: type chart, role catalog and alternate form support."""
