"""Application layer: ports and use cases of the literate console."""
