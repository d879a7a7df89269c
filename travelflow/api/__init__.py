# travelflow/api/__init__.py
