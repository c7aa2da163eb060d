"""ClipRender CLI - timeline inspection and local rendering."""

__version__ = "1.0.0"
