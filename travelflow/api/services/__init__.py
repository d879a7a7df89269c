# travelflow/api/services/__init__.py
