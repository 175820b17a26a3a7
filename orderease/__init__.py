"""OrderEase restaurant order management."""
