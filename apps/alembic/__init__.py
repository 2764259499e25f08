# -*- coding: utf-8 -*-
"""Alembic: web front-end for the alchemy calculator.

- Backend: FastAPI (ASGI)
- Data: data/ingredients.json
- UI: lightweight single-page HTML (served by backend)
"""

__all__ = ["__version__"]
__version__ = "0.3.0"
