"""
Version 1 of the Wellbeing API.
"""
