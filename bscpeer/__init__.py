"""Building blocks for a BNB Smart Chain peer: chain configuration and peer protocol pieces."""

__version__ = "0.1.0"