"""ESTree JSON frontend: pattern translation and construct traversal."""
