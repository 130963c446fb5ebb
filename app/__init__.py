# app/__init__.py
"""
Restaurant POS API: menus, foods, tables, orders, order items, invoices
and users over one entity store.

Serve it with:
    uvicorn app:app
"""

from .main import app

__version__ = "0.1.0"

__all__ = ["app", "__version__"]
