# src/areacount/core/__init__.py
