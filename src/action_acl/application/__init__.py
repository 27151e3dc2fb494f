"""Application layer – middleware pipeline around action handlers."""
