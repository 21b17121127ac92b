"""Core layer: randomness, tree generation/measurement and sample statistics."""
