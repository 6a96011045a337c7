"""Bookstore - Core Application Package

This package contains the core application modules including:
- Book record (book.py)
- Request handlers and their lifecycle contract (handlers/)
- Handler container (container.py)
- API endpoints (api.py)
- CLI interface (main.py)
"""
