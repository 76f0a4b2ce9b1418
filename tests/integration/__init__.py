"""
Integration tests for the Feedback Analyzer.

Exercise the FastAPI application end to end with TestClient; the
inference backend is replaced by a mock through dependency overrides.
"""
