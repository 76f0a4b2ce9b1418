"""
Unit tests for the Feedback Analyzer.

Test individual components in isolation:
- Data models and catalogs
- Prompt builder (template rendering, request construction)
- Workers AI client (mocked transport)
- Analysis pipeline (validator, dispatcher, normalizer, assembler, service)
- API dependency wiring
"""
