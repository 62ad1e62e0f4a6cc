"""Detection, composition and rendering layers."""
