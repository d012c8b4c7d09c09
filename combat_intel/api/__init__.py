"""HTTP adapter around the combat engine."""
