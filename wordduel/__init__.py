"""Two-player word guessing duel: session engine, dictionary validation and transport."""
