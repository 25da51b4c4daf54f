"""yieldscope: U.S. Treasury par-yield curve viewer."""

__version__ = "0.1.0"
