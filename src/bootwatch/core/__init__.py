"""bootwatch core: configuration, logging and the exception hierarchy."""
