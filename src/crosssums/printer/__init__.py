"""PDF rendering of puzzle sheets."""
