"""HTTP surface of the housing events portal."""
