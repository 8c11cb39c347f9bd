"""
Time Server
A small HTTP service that reports the current date/time in any timezone
and converts datetimes between timezones.

Usage:
    python -m timeserver [--conf_file config.yaml] [--timezones_file timezones.dat]
"""

__version__ = "1.0.0"
