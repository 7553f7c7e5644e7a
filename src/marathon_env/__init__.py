"""Marathon performance and environmental conditions analysis."""
