"""Cut-piece tag label generator: cutting list CSV -> catalog join -> tag PDF."""

__version__ = "0.1.0"
