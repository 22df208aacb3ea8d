"""Component dependency mapper: declared dependencies, install order and reference-counted installs."""

__version__ = "0.1.0"
