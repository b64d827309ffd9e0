"""Built-in ``AIProvider`` implementations, one module per backend."""
