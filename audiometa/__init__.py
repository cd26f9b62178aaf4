"""Read tags, technical properties and chapters from MP3 and Ogg audio files."""

__version__ = "0.1.0"