"""Infrastructure: structured logging, caching and outbound HTTP."""
