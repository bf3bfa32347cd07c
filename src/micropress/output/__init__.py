"""Output formatting for ServiceResult (human, quiet, JSON)."""
