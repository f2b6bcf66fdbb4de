"""HTTP blueprints for the layout generator."""
