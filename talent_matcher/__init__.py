"""
Talent Matcher - Command-driven talent and opportunity matching engine

This package:
1. Interprets free-text (often speech-transcribed) commands into intents
2. Resolves misspelled talent names and opportunity titles
3. Scores talent/opportunity fit with explainable weighted rules
4. Optionally consults a language model for classification and scoring
5. Runs each command through a cancellable, time-boxed pipeline
"""

__version__ = "1.0.0"
__author__ = "Talent Matcher"
