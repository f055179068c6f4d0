"""bootwatch test suite."""
