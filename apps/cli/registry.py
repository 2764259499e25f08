#!/usr/bin/env python3
"""Arcadia-Lab tool registry."""

TOOLS = [
    # --- CLI tools (apps/cli) ---
    {
        "file": "brew.py",
        "alias": "brew",
        "desc": "Alchemy calculator (interactive or one-shot)",
        "usage": "arcadia brew [INGREDIENT ...] [--level 15] [--perks 0] [--catalog PATH]",
        "type": "CLI",
        "folder": "apps/cli/commands"
    },
    {
        "file": "doctor.py",
        "alias": "doctor",
        "desc": "Config, catalog and dependency health check",
        "usage": "arcadia doctor [--enforce] [--strict]",
        "type": "CLI",
        "folder": "apps/cli/commands"
    },

    # --- dev tools (devtools/) ---
    {
        "file": "serve_web.py",
        "alias": "web",
        "desc": "Start the web calculator (FastAPI + Uvicorn)",
        "usage": "arcadia web [--host 127.0.0.1 --port 8000]",
        "type": "Dev",
        "folder": "devtools"
    },
]

def get_tools():
    return TOOLS
