"""Project file handling: manifest metadata, version constants and template installation."""
