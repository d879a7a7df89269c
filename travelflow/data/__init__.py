# travelflow/data/__init__.py
