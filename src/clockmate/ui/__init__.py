"""Qt drivers for a game session: ticker, analysis worker, sound, runtime."""
