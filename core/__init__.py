"""
Core module for shared domain infrastructure.

This module contains:
- Domain exceptions, value objects and identifier generation
- Middleware components
- Health, metrics and background tasks
"""
