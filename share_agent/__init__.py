"""Share Agent - publishes local directories as Samba shares."""

__version__ = "0.1.0"
