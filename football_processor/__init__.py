"""
College Football Game Stats Processor

Load Markdown game documents (YAML frontmatter + stat tables) and export
them as CSV downloads, JSON listings, and Excel workbooks.
"""

__version__ = "1.0.0"
