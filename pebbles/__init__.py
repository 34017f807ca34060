"""
Pebbles - Pebble-removal game against an automated opponent

A small Nim variant: players alternately remove 1..k pebbles from a pile.
The package provides:
- State management and command application
- An automated opponent (random or optimal play)
- Sessions and a REST API for hosting games
"""

__version__ = "0.1.0"
