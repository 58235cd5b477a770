"""framemotion: synthesize and play animations between static scene frames."""

__version__ = "0.1.0"
