"""DailyDose: a quote of the day with offline fallback."""

__version__ = "0.1.0"
