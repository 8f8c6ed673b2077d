"""Product recommendation module for ShopAssist.

This module contains the static product catalog, keyword search and
ranking, the rule-based chat responder and the simulated image search.
"""
