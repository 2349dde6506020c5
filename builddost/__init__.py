"""BuildDost: AI project generation, template gallery and code export."""

__version__ = "0.1.0"
