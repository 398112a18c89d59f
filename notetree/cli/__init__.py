"""
Command-line interface for NoteTree.
"""
