"""OAuth request signing domain."""
