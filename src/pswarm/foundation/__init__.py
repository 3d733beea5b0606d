"""Cross-cutting plumbing: errors, logging, randomness, evaluation and objectives."""
