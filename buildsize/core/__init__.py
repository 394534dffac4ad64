"""Core size comparison: descriptors, rename resolution, diffing, formatting, snapshots."""
