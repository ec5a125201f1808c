"""
Extract Layer - Pure I/O to External APIs

This layer handles all external data fetching and the defensive parsing of
the raw payloads.
- No imports from transform or load layers
- API client returns raw JSON, extractors return plain mappings
- Handles API rate limiting, retries, error handling
"""
