"""
Test suite for the asset import service.

Run all tests: pytest
Run unit tests only: pytest tests/unit/
Run specific file: pytest tests/unit/test_header_mapping_service.py -v
"""
