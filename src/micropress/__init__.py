"""micropress — write-side content engine for a Micropub-fed Hugo site."""

__version__ = "0.3.0"
