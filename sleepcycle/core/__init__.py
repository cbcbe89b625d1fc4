"""
Calculation and analytics engine for the Sleep Cycle Engine.
"""
