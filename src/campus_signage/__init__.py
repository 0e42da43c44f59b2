"""Digital signage for campus displays: slideshow, clock/weather header and upcoming events."""

__version__ = "1.0.0"
