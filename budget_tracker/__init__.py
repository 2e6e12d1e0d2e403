"""Personal budget tracker service: entries, summaries and exchange rates."""
