"""HTTP surface for the portfolio assistant."""
