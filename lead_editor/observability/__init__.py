"""
Logging and metrics for lead-editor.
"""
