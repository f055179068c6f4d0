"""In-memory fakes for bootwatch ports."""
