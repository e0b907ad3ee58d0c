"""Rules engine and AI move search for the Indigo tile-laying game."""
