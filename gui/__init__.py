"""Qt surfaces for cursor-backed lists."""
