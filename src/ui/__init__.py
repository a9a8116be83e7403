"""
PyQt6 views over the edit session.
"""
