"""
Utility helpers shared across the Sleep Cycle Engine.
"""
