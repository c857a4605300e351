"""Spending-intent parsing, validation and rendering.

The intent layer converts an English sentence describing spending rules into a `ParsedIntent`
with integer base-unit amounts, which is then validated locally and offered as vault defaults.
"""
