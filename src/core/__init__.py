"""
Core math primitives and request contracts.

This module contains the exact decimal arithmetic engine and the JSON
contracts used to drive it. Nothing here performs I/O or keeps state.
"""
