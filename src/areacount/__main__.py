# src/areacount/__main__.py
"""Entry point when running as python -m areacount"""
from .cli import main

if __name__ == "__main__":
    raise SystemExit(main())
