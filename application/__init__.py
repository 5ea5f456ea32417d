"""
Application Layer for the progress analytics API.

This package contains:
- ports/: Abstract repository interfaces (what the analytics core needs)
- exceptions.py: Errors shared by the application and infrastructure layers
- results.py: Explicit success/failure wrapper returned by the analytics service
"""
