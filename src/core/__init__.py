"""
Placement engine: gaps, snapping, drag placement, resizing, insertion.
"""
