#!/usr/bin/env python3
"""Taskwarrior API - Run the application.

Usage:
    python run.py
    # Or: python -m taskwarrior_api.app

The API will be available at http://localhost:8080/api/v1
"""

from taskwarrior_api.app import main

if __name__ == "__main__":
    main()
