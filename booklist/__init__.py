"""Book List - terminal client for a /books REST backend

This package contains:
- Book record and response decoding (book.py)
- List controller and row view (manager.py, views.py)
- CLI interface (main.py)
- In-memory stub backend (stub_api.py)
"""

__version__ = "1.0.0"
