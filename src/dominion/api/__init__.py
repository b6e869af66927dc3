"""HTTP surface of the Dominion tick engine."""
