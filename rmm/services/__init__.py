"""Service layer: request validation and orchestration around the ranker."""
