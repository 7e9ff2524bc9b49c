"""Core pipeline subpackages for the SVG map attribute merger."""
