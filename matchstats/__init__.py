"""
Cricket Match Statistics Engine

Replays a ball-by-ball innings log and the live crease overlay into
batting and bowling figures, partnerships, fall of wickets, extras,
over summaries and match highlights.
"""

__version__ = "0.1.0"
