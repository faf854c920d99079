"""Game rules, asset metadata loading and configuration for a 2.5D side-scrolling beat 'em up."""

__version__ = "0.1.0"