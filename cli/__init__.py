"""Command-line surface for the Catechism reader."""
