"""Runtime layer: REST plumbing and query pagination."""
