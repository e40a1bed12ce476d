"""guidelint: lint HTML, CSS and JavaScript against front-end authoring conventions."""

__version__ = "0.1.0"
