"""Move generation and scoring engine."""
