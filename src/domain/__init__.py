"""Event rating domain modules."""
