"""Terminal display for build size traces (Rich)."""
