"""Open a new Ubuntu kernel release in a packaging tree."""

__version__ = "0.1.0"
