"""GymBaazi: PPL workout planner, session tracker and exercise catalog API."""

__version__ = "0.1.0"
