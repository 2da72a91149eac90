"""Request-scoped authentication dependencies."""
