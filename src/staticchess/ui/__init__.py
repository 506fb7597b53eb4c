"""Qt adapters for render/input collaborators."""
