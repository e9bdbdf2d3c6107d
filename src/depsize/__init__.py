"""depsize - see what is taking up space in node_modules."""

__version__ = "0.1.0"
