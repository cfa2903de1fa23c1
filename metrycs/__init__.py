"""Event Metrycs: mock event analytics and post-event reporting."""

__version__ = "1.0.0"
