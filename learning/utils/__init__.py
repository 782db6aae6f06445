"""Tree, digest and progress utilities."""
