"""Watch GitHub commit feeds and announce new commits."""
