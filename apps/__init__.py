"""Django apps of the marketplace backend."""
