# src/areacount/utils/__init__.py
