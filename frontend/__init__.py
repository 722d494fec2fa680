"""
Dash Dashboard Module.

Provides the Python Dash kanban board for the task board service.
"""

from frontend.app import create_dash_app

__all__ = ["create_dash_app"]
