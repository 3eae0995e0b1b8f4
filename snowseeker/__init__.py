"""
SnowSeeker package
==================

An offline, searchable and sortable browser for a bundled ski resort list.

- The CLI entry point is in `snowseeker/cli.py`.
- Sorting and searching are in `snowseeker/pipeline.py`; the list state
  that drives them is in `snowseeker/view.py`.
- Dataset loading is in `snowseeker/loader.py`.
"""

__version__ = '0.3.0'
