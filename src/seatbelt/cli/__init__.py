#
# src/seatbelt/cli/__init__.py
#
"""
Command-line interface for seatbelt.
"""
