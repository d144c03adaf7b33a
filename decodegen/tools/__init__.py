"""Command-line utilities built on the decodegen pipeline."""
