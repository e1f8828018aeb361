"""
MiniGames - Terminal Mini-Games

A command-line collection of small interactive games: coin toss,
higher or lower, a color memory game, rock paper scissors, tic-tac-toe
and word guess.
"""

__version__ = "1.0.0"
__author__ = "MiniGames Development Team"
