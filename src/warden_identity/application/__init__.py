"""Application layer: the flows that orchestrate the identity domain."""
