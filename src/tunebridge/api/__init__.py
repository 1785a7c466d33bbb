"""HTTP service layer exposing link conversion."""
