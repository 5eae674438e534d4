"""
Neighborhood matching engine.

Responsibilities:
- Score a single neighborhood against user preferences across seven categories.
- Rank a catalog snapshot by weighted total and keep the top matches.
- Explain each match with short human-readable reasons.
- Normalise weighted totals into a display-friendly compatibility percentage.
"""
